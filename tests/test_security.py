from passlib.context import CryptContext

from userauth.core.security import hash_password, verify_password


def test_default_scheme_stores_password_verbatim():
    assert hash_password("pw1") == "pw1"
    assert verify_password("pw1", "pw1")
    assert not verify_password("pw1", "pw2")
    assert not verify_password("pw1", "")
    assert not verify_password("pw1", None)


def test_hashing_scheme_can_be_layered_over_plaintext():
    # the same CryptContext setup verify_password uses, with a real hash first
    context = CryptContext(schemes=["sha256_crypt", "plaintext"], deprecated="auto")

    hashed = context.hash("pw1")
    assert hashed != "pw1"
    assert context.verify("pw1", hashed)
    # credentials stored before the switch keep working
    assert context.verify("legacy", "legacy")
    assert context.needs_update("legacy")
