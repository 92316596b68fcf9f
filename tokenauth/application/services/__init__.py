from .password_hashing import BCRYPT_MAX_PASSWORD_BYTES, BcryptPasswordHasher
from .token_generation import SecretsTokenGenerator

__all__ = ["BCRYPT_MAX_PASSWORD_BYTES", "BcryptPasswordHasher", "SecretsTokenGenerator"]
