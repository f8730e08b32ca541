# Copyright (c) 2025
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.


class TotpError(ValueError):
    """Base class for every error raised while computing a one-time password."""


class InvalidStep(TotpError):
    """The time step is zero, negative or not an integer."""


class InvalidKey(TotpError):
    """The shared secret is empty, not bytes, or was rejected by the HMAC backend."""


class DigitsOutOfRange(TotpError):
    """
    The requested code length is outside [1, 10].

    Dynamic truncation yields a 31-bit value, so anything past ten digits would
    only pad the code with leading zeros without adding entropy.
    """


class InvalidTimestamp(TotpError):
    """The timestamp is negative or its counter does not fit in 64 bits."""


class UnsupportedDigest(TotpError):
    """The digest algorithm is unknown or too short for dynamic truncation."""
