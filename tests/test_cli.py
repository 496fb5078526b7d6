import base64
import io
import unittest
from contextlib import redirect_stdout

from ecboracle.__main__ import build_parser, main


def run(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        code = main(argv)
    return code, out.getvalue()


class TestCLI(unittest.TestCase):

    def test_demo(self):
        secret = base64.b64encode(b"cli secret").decode()
        code, out = run(["demo", "--secret-b64", secret])
        self.assertEqual(code, 0)
        self.assertIn("cli secret", out)
        self.assertIn("Match ? True", out)

    def test_demo_with_prefix(self):
        secret = base64.b64encode(b"cli secret, prefixed").decode()
        code, out = run(["demo", "--prefix", "--secret-b64", secret])
        self.assertEqual(code, 0)
        self.assertIn("Match ? True", out)

    def test_budget_exhausted(self):
        code, out = run(["demo", "--max-queries", "10"])
        self.assertEqual(code, 1)
        self.assertIn("[-] Attack failed", out)

    def test_defaults(self):
        args = build_parser().parse_args(["attack"])
        self.assertEqual(args.url, "http://localhost:1337")
        self.assertFalse(args.prefix)

    def test_command_required(self):
        with self.assertRaises(SystemExit), redirect_stdout(io.StringIO()):
            build_parser().parse_args([])


if __name__ == "__main__":
    unittest.main()
