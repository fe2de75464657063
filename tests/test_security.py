from datetime import timedelta

import pytest

from multiview.core.security import InvalidTokenError, create_access_token, get_user_id_from_token


def test_user_id_comes_from_sub_claim():
    token = create_access_token({"sub": "u1", "role": "USER"})

    assert get_user_id_from_token(token) == "u1"


def test_token_without_sub_is_rejected():
    token = create_access_token({"role": "USER"})

    with pytest.raises(InvalidTokenError):
        get_user_id_from_token(token)


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "u1"}, expires_delta=timedelta(minutes=-1))

    with pytest.raises(InvalidTokenError):
        get_user_id_from_token(token)


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_missing_or_malformed_token_is_rejected(token):
    with pytest.raises(InvalidTokenError):
        get_user_id_from_token(token)
