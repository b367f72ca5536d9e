"""
VPN code generation.
"""

import random
import string

from config import VPN_CODE_LENGTH, VPN_CODE_PREFIX

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_vpn_code() -> str:
    """Generate a VPN code such as ``VPN-7QK2M9XA``."""
    suffix = "".join(random.choices(CODE_ALPHABET, k=VPN_CODE_LENGTH))
    return f"{VPN_CODE_PREFIX}{suffix}"
