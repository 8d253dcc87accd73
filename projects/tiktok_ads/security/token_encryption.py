"""
Criptografia de tokens OAuth do TikTok usando AES-256-GCM.

Formato: iv_hex:tag_hex:ciphertext_hex
"""

import os
from typing import Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from projects.tiktok_ads.config import tiktok_settings

IV_SIZE = 12
TAG_SIZE = 16


def _get_encryption_key(key_hex: Optional[str] = None) -> bytes:
    """Converte a chave hex configurada em 32 bytes."""
    key_hex = key_hex or tiktok_settings.tiktok_token_encryption_key
    if not key_hex:
        raise ValueError("TIKTOK_TOKEN_ENCRYPTION_KEY não configurada")
    key_bytes = bytes.fromhex(key_hex)
    if len(key_bytes) < 32:
        raise ValueError(
            f"Chave deve ter 32 bytes (64 hex chars), recebeu {len(key_bytes)} bytes"
        )
    return key_bytes[:32]


def encrypt_token(token: str, key_hex: Optional[str] = None) -> str:
    """Encrypt token with AES-256-GCM. Returns 'iv_hex:tag_hex:ciphertext_hex'."""
    aesgcm = AESGCM(_get_encryption_key(key_hex))
    iv = os.urandom(IV_SIZE)
    ciphertext_with_tag = aesgcm.encrypt(iv, token.encode("utf-8"), None)
    # AESGCM anexa a tag de 16 bytes ao final do ciphertext
    ciphertext = ciphertext_with_tag[:-TAG_SIZE]
    tag = ciphertext_with_tag[-TAG_SIZE:]
    return f"{iv.hex()}:{tag.hex()}:{ciphertext.hex()}"


def decrypt_token(encrypted: str, key_hex: Optional[str] = None) -> str:
    """Decrypt token in 'iv:tag:ciphertext' format."""
    parts = encrypted.split(":")
    if len(parts) != 3:
        raise ValueError(
            f"Formato de token criptografado inválido: {len(parts)} partes"
        )
    iv, tag, ciphertext = (bytes.fromhex(part) for part in parts)
    aesgcm = AESGCM(_get_encryption_key(key_hex))
    plaintext = aesgcm.decrypt(iv, ciphertext + tag, None)
    return plaintext.decode("utf-8")
