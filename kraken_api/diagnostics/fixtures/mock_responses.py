"""
Mock Responses — Sample Kraken envelopes for offline/unit testing.
Can be used to validate decoding and signing without hitting the live API.
"""

MOCK_TIME_RESPONSE = {
    "error": [],
    "result": {
        "unixtime": 1700000000,
        "rfc1123": "Tue, 14 Nov 23 22:13:20 +0000",
    },
}

MOCK_TICKER_RESPONSE = {
    "error": [],
    "result": {
        "XXBTZEUR": {
            "a": ["34500.10000", "1", "1.000"],
            "b": ["34500.00000", "2", "2.000"],
            "c": ["34500.10000", "0.00100000"],
            "v": ["812.31205418", "2204.94382302"],
            "p": ["34412.40291", "34388.59914"],
            "t": [9214, 24102],
            "l": ["34050.00000", "33900.00000"],
            "h": ["34780.00000", "34780.00000"],
            "o": "34300.00000",
        }
    },
}

MOCK_BALANCE_RESPONSE = {
    "error": [],
    "result": {
        "ZEUR": "1250.0000",
        "XXBT": "0.0500000000",
    },
}

MOCK_INVALID_NONCE_RESPONSE = {
    "error": ["EAPI:Invalid nonce"],
}

MOCK_INSUFFICIENT_FUNDS_RESPONSE = {
    "error": ["EOrder:Insufficient funds"],
}

MOCK_NOT_AN_ENVELOPE = {
    "status": "ok",
    "data": {},
}

MOCK_HTML_ERROR_PAGE = b"<html><body><h1>502 Bad Gateway</h1></body></html>"

# Published example from Kraken's REST authentication guide
SIGNING_VECTOR = {
    "secret": "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg==",
    "path": "/0/private/AddOrder",
    "nonce": "1616492376594",
    "body": b"nonce=1616492376594&ordertype=limit&pair=XBTUSD&price=37500&type=buy&volume=1.25",
    "signature": "4/dpxb3iT4tp/ZCVEwSnEsLxx0bqyhLpdfOpc6fn7OR8+UClSV5n9E6aSS8MPtnRfp32bAb0nmbRn6H8ndwLUQ==",
}
