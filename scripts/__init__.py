"""Maintenance and inspection scripts"""
