import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

import to_pkcs8
from keyconv.testdata import (EC_P256_PEM, EC_P256_PKCS8_PEM, RSA_2048_PEM,
                              RSA_2048_PKCS8_PEM)


class TestToPkcs8Cli(unittest.TestCase):

    def setUp(self):
        self._dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._dir.cleanup)

    def path(self, name):
        return os.path.join(self._dir.name, name)

    def write(self, name, text):
        with open(self.path(name), 'w') as file:
            file.write(text)
        return self.path(name)

    def test_file_to_file(self):
        source = self.write("ec.pem", EC_P256_PEM)
        self.assertEqual(0, to_pkcs8.main([source, "-o", self.path("out.pem")]))
        with open(self.path("out.pem"), 'r', newline='') as file:
            self.assertEqual(EC_P256_PKCS8_PEM, file.read())

    def test_stdin_to_stdout(self):
        out = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO(RSA_2048_PEM)), contextlib.redirect_stdout(out):
            self.assertEqual(0, to_pkcs8.main(["-"]))
        self.assertEqual(RSA_2048_PKCS8_PEM, out.getvalue())

    def test_bad_key_writes_nothing(self):
        source = self.write("bad.pem", EC_P256_PEM.replace("MHcC", "MHcD"))
        with self.assertLogs("to_pkcs8", level="ERROR") as logs:
            self.assertEqual(1, to_pkcs8.main([source, "-o", self.path("out.pem")]))
        self.assertFalse(os.path.exists(self.path("out.pem")))
        self.assertIn("Conversion failed", logs.output[0])

    def test_binary_input(self):
        source = self.path("key.der")
        with open(source, 'wb') as file:
            file.write(b'\x30\x82\x04\xa2\x02\x01\x00\xff\xfe')
        with self.assertLogs("to_pkcs8", level="ERROR") as logs:
            self.assertEqual(1, to_pkcs8.main([source, "-o", self.path("out.pem")]))
        self.assertFalse(os.path.exists(self.path("out.pem")))
        self.assertIn("Conversion failed", logs.output[0])

    def test_missing_input(self):
        with self.assertLogs("to_pkcs8", level="ERROR"):
            self.assertEqual(1, to_pkcs8.main([self.path("missing.pem")]))

    def test_unsupported_label(self):
        source = self.write("p8.pem", EC_P256_PKCS8_PEM)
        with self.assertLogs("to_pkcs8", level="ERROR"):
            self.assertEqual(1, to_pkcs8.main([source]))
