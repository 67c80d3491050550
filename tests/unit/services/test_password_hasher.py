from src.app.services.password_hasher import hash_password, verify_password


def test_hash_and_verify():
    password_hash = hash_password("SecurePass123!")

    assert password_hash != "SecurePass123!"
    assert verify_password("SecurePass123!", password_hash)
    assert not verify_password("WrongPass123!", password_hash)


def test_verify_against_non_bcrypt_value_is_false():
    assert not verify_password("SecurePass123!", "not-a-bcrypt-hash")
