"""Test identities — owner ids and the headers the upstream auth layer would set."""

OWNER = "user-1"
OTHER_OWNER = "user-2"
OWNER_HEADERS = {"X-User-Id": OWNER}
OTHER_HEADERS = {"X-User-Id": OTHER_OWNER}
