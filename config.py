# config.py – Session Event Logger Konfiguration
# ==============================================
# ⚠️ WICHTIGE HINWEISE:
# - Alle Werte sind Modul-Konstanten, es werden keine Umgebungsvariablen gelesen
# - Für Tests und Tools: Basisverzeichnis per Konstruktor bzw. --base-dir überschreiben

# =============================================================================
# ABSCHNITT 1: SESSION LOG VERZEICHNIS
# =============================================================================

# Basisverzeichnis für alle Session-Logs (wird bei Bedarf rekursiv angelegt)
HOOK_DEBUG_DIR = "/tmp/cc-hook-debug"

# Dateiendung pro Session: <HOOK_DEBUG_DIR>/<session_id>.jsonl
SESSION_LOG_SUFFIX = ".jsonl"

# Dateiname, wenn das Event kein session_id-Feld hat: <HOOK_DEBUG_DIR>/None.jsonl
MISSING_SESSION_ID = "None"

# =============================================================================
# ABSCHNITT 2: EINGABE
# =============================================================================

# stdin wird vollständig gepuffert und dann dekodiert
INPUT_ENCODING = "utf-8"
# "replace": ungültige Bytes werden zu U+FFFD statt die Dekodierung abzubrechen
INPUT_DECODE_ERRORS = "replace"

# =============================================================================
# ABSCHNITT 3: LOGGING (Diagnose, immer nach stderr)
# =============================================================================

# DEBUG | INFO | WARNING | ERROR – WARNING hält einen erfolgreichen Hook-Lauf still
CONSOLE_LEVEL = "WARNING"
SHOW_EVENT_TYPE_IN_CONSOLE = True

# =============================================================================
# ABSCHNITT 4: QUERY TOOL (scripts/query_logs.py)
# =============================================================================

QUERY_DEFAULT_LIMIT = 50
QUERY_PREVIEW_WIDTH = 80
