#######################################
# IMPORTS
#######################################

import base64
import logging
import os
import pickle
import zlib

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)

#######################################
# CONSTANTS
#######################################

PREFIX_LEN_SIZE = 2
TOKEN_LEN_SIZE = 4
HEADER_SIZE = PREFIX_LEN_SIZE + TOKEN_LEN_SIZE
KEY_SIZE = 32

#######################################
# IMAGES
#######################################

class ImageError(Exception):
    pass


def make_key(passphrase):
    raw_key = passphrase.encode('utf-8')[:KEY_SIZE].ljust(KEY_SIZE, b'\0')
    return base64.urlsafe_b64encode(raw_key)


def random_padding():
    return os.urandom(os.urandom(1)[0] % 32 + 10)


def save_image(statements, locals_, filename, key):
    """Write a resolved program to `filename`.

    The resolution table is keyed by node identity; pickling both halves in
    one call keeps the keys pointing at the very nodes stored alongside.
    """
    # 1. Serialize and compress
    serialized_data = pickle.dumps((statements, locals_), protocol=pickle.HIGHEST_PROTOCOL)
    compressed_data = zlib.compress(serialized_data, level=9)

    # 2. Encrypt
    fernet = Fernet(key)
    encrypted_data = fernet.encrypt(compressed_data)

    # 3. Surround with random padding
    prefix = random_padding()
    suffix = random_padding()

    # Header: prefix length (2 bytes), then token length (4 bytes)
    header = len(prefix).to_bytes(PREFIX_LEN_SIZE, byteorder='big') + \
        len(encrypted_data).to_bytes(TOKEN_LEN_SIZE, byteorder='big')

    with open(filename, 'wb') as f:
        f.write(header + prefix + encrypted_data + suffix)

    logger.debug('wrote image %s (%d statements, %d bytes of token)',
                 filename, len(statements), len(encrypted_data))


def load_image(filename, key):
    """Read a program written by `save_image`, returning `(statements, locals_)`."""
    with open(filename, 'rb') as f:
        raw_data = f.read()

    if len(raw_data) < HEADER_SIZE:
        raise ImageError(f'{filename}: file too short to be an image')

    prefix_len = int.from_bytes(raw_data[:PREFIX_LEN_SIZE], byteorder='big')
    content_len = int.from_bytes(raw_data[PREFIX_LEN_SIZE:HEADER_SIZE], byteorder='big')

    start_pos = HEADER_SIZE + prefix_len
    end_pos = start_pos + content_len
    if end_pos > len(raw_data):
        raise ImageError(f'{filename}: truncated image')

    fernet = Fernet(key)
    try:
        decrypted_data = fernet.decrypt(raw_data[start_pos:end_pos])
    except InvalidToken as e:
        raise ImageError(f'{filename}: wrong key or corrupted image') from e

    statements, locals_ = pickle.loads(zlib.decompress(decrypted_data))
    logger.debug('loaded image %s (%d statements)', filename, len(statements))
    return statements, locals_
