# Copyright (c) 2025
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""A simple, correct TOTP library (RFC 6238 / RFC 4226)."""

from totp_lite.digests import (
    SHA1, SHA256, SHA384, SHA512, SHA3_256, SHA3_512, CryptographyDigest, DigestAlgorithm, get_digest
)
from totp_lite.exceptions import (
    DigitsOutOfRange, InvalidKey, InvalidStep, InvalidTimestamp, TotpError, UnsupportedDigest
)
from totp_lite.otp import (
    DEFAULT_DIGITS, DEFAULT_STEP, TimeBasedOneTimePassword, compute_code, derive_counter_bytes,
    dynamic_truncate, hotp, seconds_remaining, totp, totp_custom, validate_parameters,
    resolve_digest
)

__all__ = [
    'DEFAULT_DIGITS',
    'DEFAULT_STEP',
    'SHA1',
    'SHA256',
    'SHA384',
    'SHA512',
    'SHA3_256',
    'SHA3_512',
    'CryptographyDigest',
    'DigestAlgorithm',
    'DigitsOutOfRange',
    'InvalidKey',
    'InvalidStep',
    'InvalidTimestamp',
    'TimeBasedOneTimePassword',
    'TotpError',
    'UnsupportedDigest',
    'compute_code',
    'derive_counter_bytes',
    'dynamic_truncate',
    'get_digest',
    'hotp',
    'resolve_digest',
    'seconds_remaining',
    'totp',
    'totp_custom',
    'validate_parameters',
]
