# Copyright (c) 2025
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from typing import Dict, Protocol, Union, runtime_checkable

from cryptography.hazmat.primitives import hashes, hmac

from totp_lite.exceptions import InvalidKey, UnsupportedDigest

# Dynamic truncation reads four bytes starting at an offset of at most 15.
MIN_DIGEST_SIZE = 20


@runtime_checkable
class DigestAlgorithm(Protocol):
    """
    Strategy used by the HOTP core to compute the keyed hash.

    Anything exposing a name, a digest size and an ``hmac`` method can be
    passed to ``totp``/``totp_custom`` in place of the bundled algorithms.
    """

    name: str
    digest_size: int

    def hmac(self, key: bytes, message: bytes) -> bytes:
        ...


class CryptographyDigest:
    """
    HMAC strategy backed by a ``cryptography`` hash algorithm.

    Args:
        hash_algorithm: A ``cryptography.hazmat.primitives.hashes.HashAlgorithm``
                        subclass or instance, e.g. ``hashes.SHA256``.
    """

    def __init__(self, hash_algorithm: Union[hashes.HashAlgorithm, type]):
        if isinstance(hash_algorithm, type):
            hash_algorithm = hash_algorithm()

        if not isinstance(hash_algorithm, hashes.HashAlgorithm):
            raise UnsupportedDigest(f"Not a hash algorithm: {hash_algorithm!r}")

        if hash_algorithm.digest_size < MIN_DIGEST_SIZE:
            raise UnsupportedDigest(
                f'{hash_algorithm.name} produces {hash_algorithm.digest_size} bytes, '
                f'at least {MIN_DIGEST_SIZE} are required for dynamic truncation'
            )

        self._hash_algorithm = hash_algorithm

    @property
    def name(self) -> str:
        return self._hash_algorithm.name

    @property
    def digest_size(self) -> int:
        return self._hash_algorithm.digest_size

    def hmac(self, key: bytes, message: bytes) -> bytes:
        try:
            mac = hmac.HMAC(key, self._hash_algorithm)

        except (TypeError, ValueError) as e:
            raise InvalidKey(f'HMAC-{self.name} rejected the key: {str(e)}') from e

        mac.update(message)
        return mac.finalize()

    def __repr__(self) -> str:
        return f'CryptographyDigest({self.name})'


SHA1 = CryptographyDigest(hashes.SHA1)
SHA256 = CryptographyDigest(hashes.SHA256)
SHA384 = CryptographyDigest(hashes.SHA384)
SHA512 = CryptographyDigest(hashes.SHA512)
SHA3_256 = CryptographyDigest(hashes.SHA3_256)
SHA3_512 = CryptographyDigest(hashes.SHA3_512)

_DIGESTS_BY_NAME: Dict[str, DigestAlgorithm] = {
    'sha1': SHA1,
    'sha256': SHA256,
    'sha384': SHA384,
    'sha512': SHA512,
    'sha3256': SHA3_256,
    'sha3512': SHA3_512,
}


def get_digest(name: str) -> DigestAlgorithm:
    """
    Look up a bundled digest algorithm by name.

    Args:
        name: Case-insensitive algorithm name; dashes and underscores are
              ignored, so ``SHA-256``, ``sha256`` and ``sha3_512`` all resolve.

    Returns:
        The matching digest algorithm.
    """
    normalized = name.strip().lower().replace('-', '').replace('_', '')
    if normalized not in _DIGESTS_BY_NAME:
        raise UnsupportedDigest(f"Unsupported hash algorithm: {name}")

    return _DIGESTS_BY_NAME[normalized]
