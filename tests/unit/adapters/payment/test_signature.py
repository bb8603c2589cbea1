"""
Tests de la signature des notifications Midtrans.
"""

import hashlib

from kalanara.adapters.payment.signature import compute_signature, verify_signature

SERVER_KEY = "SB-Mid-server-test"


class TestSignature:
    """Tests pour compute_signature / verify_signature."""

    def test_sha512_of_concatenated_fields(self) -> None:
        expected = hashlib.sha512(
            f"KSP-1-ABC200450000.00{SERVER_KEY}".encode()
        ).hexdigest()
        assert compute_signature("KSP-1-ABC", "200", "450000.00", SERVER_KEY) == expected

    def test_valid_signature(self) -> None:
        signature = compute_signature("KSP-1-ABC", "200", "450000.00", SERVER_KEY)
        assert verify_signature("KSP-1-ABC", "200", "450000.00", signature, SERVER_KEY) is True

    def test_amount_is_compared_as_sent(self) -> None:
        """'450000' et '450000.00' ne produisent pas la meme signature."""
        signature = compute_signature("KSP-1-ABC", "200", "450000.00", SERVER_KEY)
        assert verify_signature("KSP-1-ABC", "200", "450000", signature, SERVER_KEY) is False

    def test_wrong_key(self) -> None:
        signature = compute_signature("KSP-1-ABC", "200", "450000.00", "other-key")
        assert verify_signature("KSP-1-ABC", "200", "450000.00", signature, SERVER_KEY) is False
