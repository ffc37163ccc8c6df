import hashlib
import hmac


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(candidate: str, expected_hash: str) -> bool:
    """Compare the SHA-256 of `candidate` against the stored hex digest in constant time."""
    return hmac.compare_digest(hash_password(candidate), expected_hash)
