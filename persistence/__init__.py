"""Session log persistence"""
