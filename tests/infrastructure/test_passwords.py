"""Password Hashing - salted hashes verify only the original password."""

from tasktracker.infrastructure.passwords import check_password, hash_password


def test_hash_verifies_original_password():
    hashed = hash_password("correct horse", iterations=1_000)
    assert check_password("correct horse", hashed)


def test_hash_rejects_other_password():
    hashed = hash_password("correct horse", iterations=1_000)
    assert not check_password("battery staple", hashed)


def test_same_password_hashes_differently():
    assert hash_password("pw12345678", iterations=1_000) != hash_password(
        "pw12345678", iterations=1_000,
    )


def test_hash_does_not_contain_password():
    assert "pw12345678" not in hash_password("pw12345678", iterations=1_000)


def test_malformed_stored_hash_never_verifies():
    assert not check_password("anything", "")
    assert not check_password("anything", "md5$1$00$00")
    assert not check_password("anything", "pbkdf2_sha256$x$zz$zz")
