import sys
import os

import pytest
from jose import jwt

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from ballot_registry import config
from ballot_registry.security import create_access_token, decode_identity
from ballot_registry.errors import InvalidToken


def test_token_identity():
    assert decode_identity(create_access_token('0xVoter1')) == '0xVoter1'


def test_expired_token():
    token = create_access_token('0xVoter1', expires_delta=-1)
    with pytest.raises(InvalidToken):
        decode_identity(token)


def test_foreign_signature():
    token = jwt.encode({'sub': '0xOwner'}, 'someone-elses-key', algorithm='HS256')
    with pytest.raises(InvalidToken):
        decode_identity(token)


def test_token_without_subject():
    token = jwt.encode({'role': 'voter'}, config.SECRET_KEY, algorithm=config.ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_identity(token)
