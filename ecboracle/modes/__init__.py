from .base import BlockMode, crypt
from .cbc import CBCDecrypter, CBCEncrypter, new_cbc_decrypter, new_cbc_encrypter
from .ecb import (ECBDecrypter, ECBEncrypter, find_ecb_ciphertext, is_ecb_ciphertext,
                  new_ecb_decrypter, new_ecb_encrypter)
