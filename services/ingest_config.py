import os

# === Spreadsheet ===
SPREADSHEET_ID = os.getenv("SPREADSHEET_ID")
SHEET_NAME     = os.getenv("SHEET_NAME", "Sheet1")

# Service account: inline JSON takes precedence over a key file
GOOGLE_SERVICE_ACCOUNT_JSON    = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
]

# === Server ===
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT      = int(os.getenv("PORT", "8000"))

# === Responses ===
SUCCESS_MSG   = "Success"
GET_ONLY_MSG  = "This script only accepts POST requests."
PARSE_ERR_MSG = "Error parsing JSON data: "
