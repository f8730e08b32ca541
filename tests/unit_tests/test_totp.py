import unittest
from unittest.mock import patch

from totp_lite import (
    SHA1, SHA256, SHA512, DigitsOutOfRange, UnsupportedDigest, InvalidKey, InvalidStep, InvalidTimestamp,
    TimeBasedOneTimePassword, TotpError, compute_code, derive_counter_bytes, dynamic_truncate,
    hotp, seconds_remaining, totp, totp_custom
)
from totp_lite.otp import time_factor, to_bytes

SECRET_SHA1 = b'12345678901234567890'
SECRET_SHA256 = b'12345678901234567890123456789012'
SECRET_SHA512 = b'1234567890123456789012345678901234567890123456789012345678901234'


class TestCounterDerivation(unittest.TestCase):
    """Tests for turning a timestamp into the HOTP counter message."""

    def test_derive_counter_bytes(self):
        """Test the counter serialization against the RFC 6238 test times."""
        self.assertEqual(derive_counter_bytes(59, 30), bytes([0, 0, 0, 0, 0, 0, 0, 1]))
        self.assertEqual(
            derive_counter_bytes(1111111109, 30), bytes([0, 0, 0, 0, 0x02, 0x35, 0x23, 0xec])
        )
        self.assertEqual(
            derive_counter_bytes(20000000000, 30), bytes([0, 0, 0, 0, 0x27, 0xbc, 0x86, 0xaa])
        )

    def test_time_factor_floors(self):
        """Test that the counter is the floor of timestamp / step."""
        self.assertEqual(time_factor(0), 0)
        self.assertEqual(time_factor(29), 0)
        self.assertEqual(time_factor(30), 1)
        self.assertEqual(time_factor(119, 60), 1)

    def test_to_bytes_bounds(self):
        """Test the largest and smallest 64-bit counters and an overflow."""
        self.assertEqual(to_bytes(0), b'\x00' * 8)
        self.assertEqual(to_bytes(2 ** 64 - 1), b'\xff' * 8)

        with self.assertRaises(InvalidTimestamp):
            to_bytes(2 ** 64)

    def test_invalid_step(self):
        """Test that a zero, negative or fractional step is rejected."""
        for step in (0, -30, 1.5, True):
            with self.subTest(step=step):
                with self.assertRaises(InvalidStep):
                    derive_counter_bytes(59, step)

    def test_invalid_timestamp(self):
        """Test that a negative timestamp is rejected."""
        with self.assertRaises(InvalidTimestamp):
            derive_counter_bytes(-1, 30)

        with self.assertRaises(InvalidTimestamp):
            derive_counter_bytes(59.5, 30)


class TestHotpCore(unittest.TestCase):
    """Tests for dynamic truncation and code formatting."""

    def test_dynamic_truncate_rfc4226_example(self):
        """Test the worked example from RFC 4226 section 5.4."""
        digest = bytes.fromhex('1f8698690e02ca16618550ef7f19da8e945b555a')

        self.assertEqual(dynamic_truncate(digest), 0x50ef7f19)
        self.assertEqual(dynamic_truncate(digest) % 10 ** 6, 872921)

    def test_dynamic_truncate_masks_top_bit(self):
        """Test that the window is never read as a signed value."""
        digest = b'\xff' * 19 + b'\x00'

        self.assertEqual(dynamic_truncate(digest), 0x7fffffff)

    def test_dynamic_truncate_empty_digest(self):
        """Test that digests too short to hold any window are refused."""
        for digest in (b'', b'\x00\x00\x00'):
            with self.subTest(length=len(digest)):
                with self.assertRaises(UnsupportedDigest):
                    dynamic_truncate(digest)

    def test_dynamic_truncate_uses_last_nibble(self):
        """Test that only the low nibble of the final byte selects the offset."""
        digest = bytes(range(19)) + b'\xf3'

        self.assertEqual(dynamic_truncate(digest), 0x03040506)

    def test_hotp_rfc4226_vectors(self):
        """Test the HOTP values from RFC 4226 Appendix D."""
        expected = ['755224', '287082', '359152', '969429', '338314', '254676']

        for counter, code in enumerate(expected):
            with self.subTest(counter=counter):
                self.assertEqual(hotp(SECRET_SHA1, counter, digits=6), code)

    def test_compute_code_zero_pads(self):
        """Test that short values are left padded with zeros."""
        code = compute_code(SECRET_SHA1, derive_counter_bytes(1111111109, 30), SHA1, 8)

        self.assertEqual(code, '07081804')

    def test_empty_secret(self):
        """Test that an empty secret is refused instead of being used as a key."""
        with self.assertRaises(InvalidKey):
            totp(b'', 59)

    def test_secret_not_bytes(self):
        """Test that a text secret is refused."""
        with self.assertRaises(InvalidKey):
            totp('12345678901234567890', 59)

    def test_bytearray_secret(self):
        """Test that any bytes-like secret is accepted."""
        self.assertEqual(totp(bytearray(SECRET_SHA1), 59), '94287082')

    def test_digits_out_of_range(self):
        """Test that code lengths outside [1, 10] fail fast."""
        for digits in (0, -1, 11, 20, True):
            with self.subTest(digits=digits):
                with self.assertRaises(DigitsOutOfRange):
                    totp_custom(30, digits, SECRET_SHA1, 59)

    def test_errors_are_value_errors(self):
        """Test that every failure can be caught as TotpError or ValueError."""
        with self.assertRaises(TotpError):
            totp_custom(0, 8, SECRET_SHA1, 59)

        with self.assertRaises(ValueError):
            totp_custom(30, 8, b'', 59)


class TestTotp(unittest.TestCase):
    """Tests for the public TOTP entry points against RFC 6238 Appendix B."""

    def test_totp_sha1(self):
        """Test the SHA-1 vectors."""
        pairs = [
            ('94287082', 59),
            ('07081804', 1111111109),
            ('14050471', 1111111111),
            ('89005924', 1234567890),
            ('69279037', 2000000000),
            ('65353130', 20000000000),
        ]

        for expected, timestamp in pairs:
            with self.subTest(timestamp=timestamp):
                self.assertEqual(totp(SECRET_SHA1, timestamp, SHA1), expected)

    def test_totp_sha256(self):
        """Test the SHA-256 vectors."""
        pairs = [
            ('46119246', 59),
            ('68084774', 1111111109),
            ('67062674', 1111111111),
            ('91819424', 1234567890),
            ('90698825', 2000000000),
            ('77737706', 20000000000),
        ]

        for expected, timestamp in pairs:
            with self.subTest(timestamp=timestamp):
                self.assertEqual(totp(SECRET_SHA256, timestamp, SHA256), expected)

    def test_totp_sha512(self):
        """Test the SHA-512 vectors."""
        pairs = [
            ('90693936', 59),
            ('25091201', 1111111109),
            ('99943326', 1111111111),
            ('93441116', 1234567890),
            ('38618901', 2000000000),
            ('47863826', 20000000000),
        ]

        for expected, timestamp in pairs:
            with self.subTest(timestamp=timestamp):
                self.assertEqual(totp(SECRET_SHA512, timestamp, SHA512), expected)

    def test_totp_defaults_to_sha1(self):
        self.assertEqual(totp(SECRET_SHA1, 59), '94287082')

    def test_totp_custom_matches_totp(self):
        """Test that totp is totp_custom with a 30 second step and 8 digits."""
        self.assertEqual(
            totp_custom(30, 8, SECRET_SHA256, 1234567890, SHA256),
            totp(SECRET_SHA256, 1234567890, SHA256)
        )

    def test_deterministic(self):
        """Test that repeated calls give the same code."""
        codes = {totp_custom(60, 6, SECRET_SHA512, 1700000000, SHA512) for _ in range(5)}

        self.assertEqual(len(codes), 1)

    def test_code_width(self):
        """Test that the code always has exactly the requested number of digits."""
        for digits in range(1, 11):
            for timestamp in (0, 59, 1111111109, 1234567890, 20000000000):
                with self.subTest(digits=digits, timestamp=timestamp):
                    code = totp_custom(30, digits, SECRET_SHA1, timestamp)

                    self.assertEqual(len(code), digits)
                    self.assertTrue(code.isdigit())

    def test_same_window_same_code(self):
        """Test that timestamps inside one step share a code and the next step differs."""
        self.assertEqual(totp(SECRET_SHA1, 30), totp(SECRET_SHA1, 59))
        self.assertNotEqual(totp(SECRET_SHA1, 59), totp(SECRET_SHA1, 60))

    def test_shorter_code_is_suffix(self):
        """Test that a 6 digit code is the tail of the 10 digit code."""
        for timestamp in (59, 1111111111, 2000000000):
            with self.subTest(timestamp=timestamp):
                long_code = totp_custom(30, 10, SECRET_SHA1, timestamp)
                short_code = totp_custom(30, 6, SECRET_SHA1, timestamp)

                self.assertEqual(long_code[-6:], short_code)

    def test_custom_step(self):
        """Test that the step changes the counter fed to HOTP."""
        self.assertEqual(totp_custom(60, 8, SECRET_SHA1, 119), hotp(SECRET_SHA1, 1))

    def test_seconds_remaining(self):
        self.assertEqual(seconds_remaining(59), 1)
        self.assertEqual(seconds_remaining(60), 30)
        self.assertEqual(seconds_remaining(61, 60), 59)

    def test_seconds_remaining_invalid_step(self):
        """Test that the remaining time is not computed for a zero or negative step."""
        for step in (0, -30):
            with self.subTest(step=step):
                with self.assertRaises(InvalidStep):
                    seconds_remaining(59, step)

    def test_algorithm_by_name(self):
        """Test that a bundled algorithm can be chosen by name."""
        self.assertEqual(totp(SECRET_SHA256, 59, 'sha256'), '46119246')
        self.assertEqual(totp_custom(30, 8, SECRET_SHA512, 1234567890, 'SHA-512'), '93441116')

    def test_algorithm_not_a_digest(self):
        """Test that unknown names and objects without an hmac method are refused."""
        for algorithm in ('md5', 42, object()):
            with self.subTest(algorithm=algorithm):
                with self.assertRaises(UnsupportedDigest):
                    totp(SECRET_SHA1, 59, algorithm)


class TestTimeBasedOneTimePassword(unittest.TestCase):
    """Tests for the parameter-holding TOTP generator."""

    def test_retrieve_code_with_timestamp(self):
        generator = TimeBasedOneTimePassword(SECRET_SHA256, algorithm=SHA256)

        self.assertEqual(generator.retrieve_code(20000000000), '77737706')

    @patch('totp_lite.otp.time')
    def test_retrieve_code_uses_clock(self, mock_time):
        """Test that the current time is used when no timestamp is given."""
        mock_time.time.return_value = 59.9
        generator = TimeBasedOneTimePassword(SECRET_SHA1)

        self.assertEqual(generator.retrieve_code(), '94287082')
        self.assertEqual(generator.seconds_remaining(), 1)

    def test_generator_algorithm_by_name(self):
        generator = TimeBasedOneTimePassword(SECRET_SHA256, algorithm='sha256')

        self.assertIs(generator.algorithm, SHA256)
        self.assertEqual(generator.retrieve_code(20000000000), '77737706')

    def test_six_digit_generator(self):
        generator = TimeBasedOneTimePassword(SECRET_SHA1, digits=6)

        self.assertEqual(generator.retrieve_code(1234567890), '005924')

    def test_parameters_validated_on_construction(self):
        """Test that bad parameters fail before any code is requested."""
        with self.assertRaises(InvalidKey):
            TimeBasedOneTimePassword(b'')

        with self.assertRaises(InvalidStep):
            TimeBasedOneTimePassword(SECRET_SHA1, step=0)

        with self.assertRaises(DigitsOutOfRange):
            TimeBasedOneTimePassword(SECRET_SHA1, digits=11)


if __name__ == '__main__':
    unittest.main()
