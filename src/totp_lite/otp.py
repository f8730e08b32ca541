# Copyright (c) 2025
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import time
from typing import Optional

from totp_lite.digests import SHA1, DigestAlgorithm, get_digest
from totp_lite.exceptions import (
    DigitsOutOfRange, InvalidKey, InvalidStep, InvalidTimestamp, UnsupportedDigest
)

DEFAULT_STEP = 30
DEFAULT_DIGITS = 8
MAX_DIGITS = 10


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_step(step: int):
    if not _is_int(step) or step <= 0:
        raise InvalidStep(f'Time step must be a positive integer, got {step!r}')


def _check_digits(digits: int):
    if not _is_int(digits) or not 1 <= digits <= MAX_DIGITS:
        raise DigitsOutOfRange(f'Digits must be between 1 and {MAX_DIGITS}, got {digits!r}')


def _check_secret(secret: bytes):
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidKey(f'Secret must be bytes, got {type(secret).__name__}')

    if len(secret) == 0:
        raise InvalidKey('Secret must not be empty')


def resolve_digest(algorithm) -> DigestAlgorithm:
    """Accept a digest strategy or the name of a bundled one, such as 'sha256'."""
    if isinstance(algorithm, str):
        return get_digest(algorithm)

    if not callable(getattr(algorithm, 'hmac', None)):
        raise UnsupportedDigest(f'Not a digest algorithm: {algorithm!r}')

    return algorithm


def validate_parameters(step: int, digits: int):
    """Reject a step or digit count that no code could be computed with."""
    _check_step(step)
    _check_digits(digits)


def time_factor(timestamp: int, step: int = DEFAULT_STEP) -> int:
    """The RFC 6238 ``T`` value: number of whole steps since the epoch."""
    _check_step(step)
    if not _is_int(timestamp) or timestamp < 0:
        raise InvalidTimestamp(f'Timestamp must be a non-negative integer, got {timestamp!r}')

    return timestamp // step


def to_bytes(n: int) -> bytes:
    """Serialize a counter as an 8-byte big-endian unsigned integer."""
    try:
        return n.to_bytes(8, 'big', signed=False)

    except OverflowError as e:
        raise InvalidTimestamp(f'Counter {n} does not fit in 64 unsigned bits') from e


def derive_counter_bytes(timestamp: int, step: int = DEFAULT_STEP) -> bytes:
    """
    Convert a Unix timestamp into the HOTP counter message.

    Args:
        timestamp: Seconds since the Unix epoch.
        step: Window size in seconds; must be positive.

    Returns:
        The counter ``timestamp // step`` as 8 big-endian bytes.
    """
    return to_bytes(time_factor(timestamp, step))


def dynamic_truncate(digest: bytes) -> int:
    """
    Extract a 31-bit integer from an HMAC digest (RFC 4226, section 5.3).

    The low nibble of the last byte selects a four byte window; the top bit
    of the window is masked off so the result is never negative.
    """
    if len(digest) < 4:
        raise UnsupportedDigest(f'Digest of {len(digest)} bytes is too short for dynamic truncation')

    offset = digest[-1] & 0x0F
    if len(digest) < offset + 4:
        raise UnsupportedDigest(f'Digest of {len(digest)} bytes is too short for offset {offset}')

    return (
        (digest[offset] & 0x7F) << 24
        | digest[offset + 1] << 16
        | digest[offset + 2] << 8
        | digest[offset + 3]
    )


def compute_code(
        secret: bytes, counter_bytes: bytes, algorithm: DigestAlgorithm = SHA1,
        digits: int = DEFAULT_DIGITS
) -> str:
    """
    Compute a zero-padded HOTP code over an already serialized counter.

    Args:
        secret: Raw shared secret, used as the HMAC key.
        counter_bytes: Counter message, normally from ``derive_counter_bytes``.
        algorithm: Digest strategy, or a bundled name like 'sha256', used for the HMAC (default: SHA-1).
        digits: Length of the returned code, 1 to 10.

    Returns:
        Decimal code of exactly ``digits`` characters.
    """
    _check_digits(digits)
    _check_secret(secret)

    digest = resolve_digest(algorithm).hmac(bytes(secret), counter_bytes)
    code = dynamic_truncate(digest) % (10 ** digits)

    return str(code).zfill(digits)


def hotp(
        secret: bytes, counter: int, algorithm: DigestAlgorithm = SHA1,
        digits: int = DEFAULT_DIGITS
) -> str:
    """HMAC-based one-time password for an explicit counter value."""
    if not _is_int(counter) or counter < 0:
        raise InvalidTimestamp(f'Counter must be a non-negative integer, got {counter!r}')

    return compute_code(secret, to_bytes(counter), algorithm, digits)


def totp_custom(
        step: int, digits: int, secret: bytes, time: int,
        algorithm: DigestAlgorithm = SHA1
) -> str:
    """
    Produce a Time-based One-Time Password with explicit parameters.

    Args:
        step: Window size in seconds.
        digits: Length of the code, 1 to 10.
        secret: Raw shared secret.
        time: Seconds since the Unix epoch.
        algorithm: Digest strategy or bundled name (default: SHA-1).

    Returns:
        The TOTP code as a string
    """
    return compute_code(secret, derive_counter_bytes(time, step), algorithm, digits)


def totp(secret: bytes, time: int, algorithm: DigestAlgorithm = SHA1) -> str:
    """Produce an 8 digit Time-based One-Time Password over a 30 second step."""
    return totp_custom(DEFAULT_STEP, DEFAULT_DIGITS, secret, time, algorithm)


def seconds_remaining(timestamp: int, step: int = DEFAULT_STEP) -> int:
    """Seconds left before the window containing ``timestamp`` closes."""
    _check_step(step)
    return step - (timestamp % step)


class TimeBasedOneTimePassword:
    """
    Implementation of Time-Based One-Time Password (TOTP) according to RFC 6238.

    Holds the secret and parameters shared with the other party so codes can
    be generated repeatedly without passing them on every call.
    """

    def __init__(
            self, secret: bytes, algorithm: DigestAlgorithm = SHA1,
            step: int = DEFAULT_STEP, digits: int = DEFAULT_DIGITS
    ):
        """
        Initialize the TOTP generator.

        Args:
            secret: Raw shared secret (already Base32 decoded).
            algorithm: Digest strategy or bundled name (default: SHA-1)
            step: Time step in seconds (default: 30)
            digits: Number of digits in the generated code (default: 8)
        """
        _check_secret(secret)
        validate_parameters(step, digits)

        self.secret = bytes(secret)
        self.algorithm = resolve_digest(algorithm)
        self.step = step
        self.digits = digits

    def retrieve_code(self, timestamp: Optional[int] = None) -> str:
        """
        Generate a TOTP code for a timestamp, or for the current time.

        Args:
            timestamp: Unix timestamp (in seconds) to use for code generation.
                       If None, the current time is used.

        Returns:
            TOTP code as a string
        """
        if timestamp is None:
            timestamp = int(time.time())

        return totp_custom(self.step, self.digits, self.secret, timestamp, self.algorithm)

    def seconds_remaining(self, timestamp: Optional[int] = None) -> int:
        if timestamp is None:
            timestamp = int(time.time())

        return seconds_remaining(timestamp, self.step)
