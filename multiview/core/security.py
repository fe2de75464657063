"""
Tokens JWT usados para identificar o utilizador no canal em tempo real.
"""
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from multiview.core.config import settings
import logging

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Token ausente, expirado ou sem identificação do utilizador."""


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Cria um token JWT de acesso."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.algorithm
    )
    return encoded_jwt


def decode_token(token: str) -> dict:
    """Decodifica um token JWT."""
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm]
        )
    except JWTError as e:
        raise InvalidTokenError("Token inválido ou expirado") from e


def get_user_id_from_token(token: Optional[str]) -> str:
    """
    Extrai o id do utilizador (claim `sub`) de um token de acesso.

    Raises:
        InvalidTokenError: Se o token faltar, for inválido ou não tiver `sub`
    """
    if not token:
        raise InvalidTokenError("Token de acesso não fornecido")

    payload = decode_token(token)
    user_id = payload.get("sub")
    if user_id is None:
        raise InvalidTokenError("Token inválido")

    return str(user_id)
