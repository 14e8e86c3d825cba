"""AEAD modes (EAX, online EAX, MGM, XSalsa20Poly1305) and the Deoxys-BC block cipher."""

__version__ = "0.1.0"