import hashlib
from authlib.jose import jwt
from authlib.jose.errors import JoseError
from ..config import server
from ..exceptions import InvalidCredentials

ALGORITHM = 'HS256'

def hash_password(password: str) -> str:
    """Hex digest stored in place of the plaintext password"""
    return hashlib.sha256(password.encode('utf-8')).hexdigest()

def issue_token(username: str, secret: str = None) -> str:
    token = jwt.encode({'alg': ALGORITHM}, {'username': username}, secret or server.secret_key)
    return token.decode('utf-8')

def read_token(token: str, secret: str = None) -> str:
    """Return the username a token was issued for"""
    try:
        claims = jwt.decode(token, secret or server.secret_key)
        claims.validate()
    except (JoseError, ValueError) as e:
        raise InvalidCredentials(f"invalid token: {e}") from e
    username = claims.get('username')
    if not username:
        raise InvalidCredentials("invalid token: no username")
    return username
