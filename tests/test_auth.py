from parkerlib.github.auth import Auth


def test_unauthenticated():
    assert Auth.unauthenticated().is_authenticated() is False
    assert Auth().token is None


def test_personal_access_token():
    auth = Auth.personal_access_token("token")
    assert auth.is_authenticated() is True
    assert auth.token == "token"


def test_repr_hides_token():
    auth = Auth.personal_access_token("placeholder")
    assert "placeholder" not in repr(auth)
    assert "placeholder" not in str(auth)


def test_repr_unauthenticated():
    assert repr(Auth()) == "Auth(unauthenticated)"