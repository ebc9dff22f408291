import os
from dotenv import load_dotenv

load_dotenv()

# OKLink explorer (BTC inscriptions)
OKLINK_API_URL = os.getenv("OKLINK_API_URL", "https://www.oklink.com").rstrip("/")
OKLINK_TRANSACTION_LIST_PATH = "/api/v5/explorer/btc/transaction-list"

# Page size used by the OKLink transaction list endpoint
OKLINK_PAGE_LIMIT = int(os.getenv("OKLINK_PAGE_LIMIT", "50"))
OKLINK_TIMEOUT_SEC = float(os.getenv("OKLINK_TIMEOUT_SEC", "30"))

# Throttling: fixed delay, bounded retries
OKLINK_RATE_LIMIT_RETRIES = int(os.getenv("OKLINK_RATE_LIMIT_RETRIES", "3"))
OKLINK_RATE_LIMIT_DELAY_SEC = float(os.getenv("OKLINK_RATE_LIMIT_DELAY_SEC", "2.0"))

# Sleep between page requests to be nice to the API
OKLINK_PAGE_SLEEP_SEC = float(os.getenv("OKLINK_PAGE_SLEEP_SEC", "0.2"))

# OKLink error codes (response body "code" field)
OKLINK_RATE_LIMIT_CODES = {"50011"}
OKLINK_AUTH_CODES = {"50111", "50112", "50113", "50114"}

CSV_OUTPUT_DIR = os.getenv("CSV_OUTPUT_DIR", "csv")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CryptoTaxCalculator custom import
CTC_BLOCKCHAIN = "Bitcoin"
CTC_TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"
