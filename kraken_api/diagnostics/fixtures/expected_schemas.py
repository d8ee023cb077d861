"""
Expected Schemas — Defines the expected shape of Kraken API responses.
Used by diagnostic suites to validate that responses match known structure.
"""

# ── Public ───────────────────────────────────────────────────────────────────

TIME_RESULT_FIELDS = ["unixtime", "rfc1123"]

ASSET_FIELDS = ["altname", "decimals"]

ASSET_PAIR_FIELDS = ["altname", "base", "quote"]

# Each ticker entry is a dict of short keys; "c" is [last price, lot volume]
TICKER_FIELDS = ["a", "b", "c", "v", "h", "l", "o"]

# ── Private ──────────────────────────────────────────────────────────────────

# Balance result is {asset: amount-string}; nothing fixed to check but the type
BALANCE_RESULT_TYPE = dict

# Errors an authenticated call may legitimately return on a read-only key
ACCEPTABLE_AUTH_ERRORS = [
    "EGeneral:Permission denied",
]
