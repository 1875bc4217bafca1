"""Known-answer vectors produced by a JavaScript wallet client.

The values were generated with Node.js: ``JSON.stringify`` for the payload
and number renderings, cosmjs' ``serializeSignDoc`` rules for the sign
document, and a secp256k1 signature from the private key ``01`` * 32.
"""

WALLET_PUBLIC_KEY = "031b84c5567b126440995d3ed5aaba0565d71e1834604819ff9c17f5e9d5dd078f"
WALLET_ADDRESS = "juno10xcqpzrky6eff2g52qdye53xkk9jxkvrhje88l"
WALLET_NONCE = 3

# JSON.stringify({data, signature}) as sent by the client
WALLET_REQUEST_BODY = (
    "{\"data\":{\"auth\":{\"type\":\"Update profile\",\"nonce\":3,\"chainId\":\"ju"
    "no-1\",\"chainFeeDenom\":\"ujuno\",\"chainBech32Prefix\":\"juno\",\"public"
    "Key\":\"031b84c5567b126440995d3ed5aaba0565d71e1834604819ff9c17f5e9"
    "d5dd078f\"},\"profile\":{\"name\":\"Zoë ✓\",\"bio\":\"<b>fish & chips</b>\""
    ",\"tags\":[\"a\",\"b\"],\"empty\":{}},\"amounts\":[0.00001,0.000001,1e-7,2"
    ".5e-8,123.456,0.30000000000000004,1e+21,1152921504606847000,-1.5"
    "e-10]},\"signature\":\"fdFweTr2Ex6Qa1bgZWKcGMSysfvgZYnqR1PXA9XtDwUP"
    "8lhaYSKhc+zgaHFJQW+3lPfOM7t3VaeaAgHJ1IoojQ==\"}"
)

# JSON.stringify(data, undefined, 2)
WALLET_PRETTY_DATA = (
    "{\n  \"auth\": {\n    \"type\": \"Update profile\",\n    \"nonce\": 3,\n    "
    "\"chainId\": \"juno-1\",\n    \"chainFeeDenom\": \"ujuno\",\n    \"chainBec"
    "h32Prefix\": \"juno\",\n    \"publicKey\": \"031b84c5567b126440995d3ed5"
    "aaba0565d71e1834604819ff9c17f5e9d5dd078f\"\n  },\n  \"profile\": {\n  "
    "  \"name\": \"Zoë ✓\",\n    \"bio\": \"<b>fish & chips</b>\",\n    \"tags\":"
    " [\n      \"a\",\n      \"b\"\n    ],\n    \"empty\": {}\n  },\n  \"amounts\":"
    " [\n    0.00001,\n    0.000001,\n    1e-7,\n    2.5e-8,\n    123.456,"
    "\n    0.30000000000000004,\n    1e+21,\n    1152921504606847000,\n  "
    "  -1.5e-10\n  ]\n}"
)

# serializeSignDoc(makeSignDoc(...)) decoded as UTF-8
WALLET_SIGN_MESSAGE = (
    "{\"account_number\":\"0\",\"chain_id\":\"juno-1\",\"fee\":{\"amount\":[{\"amo"
    "unt\":\"0\",\"denom\":\"ujuno\"}],\"gas\":\"0\"},\"memo\":\"\",\"msgs\":[{\"type\":"
    "\"Update profile\",\"value\":{\"data\":\"{\\n  \\\"auth\\\": {\\n    \\\"type\\\""
    ": \\\"Update profile\\\",\\n    \\\"nonce\\\": 3,\\n    \\\"chainId\\\": \\\"jun"
    "o-1\\\",\\n    \\\"chainFeeDenom\\\": \\\"ujuno\\\",\\n    \\\"chainBech32Pref"
    "ix\\\": \\\"juno\\\",\\n    \\\"publicKey\\\": \\\"031b84c5567b126440995d3ed5"
    "aaba0565d71e1834604819ff9c17f5e9d5dd078f\\\"\\n  },\\n  \\\"profile\\\":"
    " {\\n    \\\"name\\\": \\\"Zoë ✓\\\",\\n    \\\"bio\\\": \\\"\\u003cb\\u003efish \\"
    "u0026 chips\\u003c/b\\u003e\\\",\\n    \\\"tags\\\": [\\n      \\\"a\\\",\\n   "
    "   \\\"b\\\"\\n    ],\\n    \\\"empty\\\": {}\\n  },\\n  \\\"amounts\\\": [\\n   "
    " 0.00001,\\n    0.000001,\\n    1e-7,\\n    2.5e-8,\\n    123.456,\\n"
    "    0.30000000000000004,\\n    1e+21,\\n    1152921504606847000,\\n"
    "    -1.5e-10\\n  ]\\n}\",\"signer\":\"juno10xcqpzrky6eff2g52qdye53xkk9"
    "jxkvrhje88l\"}}],\"sequence\":\"0\"}"
)

# (value, JSON.stringify(value))
JS_NUMBER_CASES = [
    (0.00001, "0.00001"),
    (0.000001, "0.000001"),
    (1e-7, "1e-7"),
    (2.5e-8, "2.5e-8"),
    (1.23e-18, "1.23e-18"),
    (-1.5e-10, "-1.5e-10"),
    (0.30000000000000004, "0.30000000000000004"),
    (123.456, "123.456"),
    (1.5, "1.5"),
    (100000000000000000000, "100000000000000000000"),
    (1e+21, "1e+21"),
    (1152921504606847000, "1152921504606847000"),
    (1.5e+300, "1.5e+300"),
    (5e-324, "5e-324"),
    (-0.0, "0"),
    (100.0, "100"),
]

# JSON.stringify({a: "x" + "\ud800" + "y"}, undefined, 2)
LONE_SURROGATE_PRETTY = "{\n  \"a\": \"x\\ud800y\"\n}"

# JSON.stringify(JSON.parse(text), undefined, 2) reorders array-index keys first
INDEX_KEYS_TEXT = "{\"b\":1,\"10\":2,\"2\":3,\"a\":4}"
INDEX_KEYS_PRETTY = "{\n  \"2\": 3,\n  \"10\": 2,\n  \"b\": 1,\n  \"a\": 4\n}"
