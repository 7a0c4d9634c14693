from __future__ import annotations

import io
import json
import os
import subprocess
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from ed2k.cli import main
from ed2k.constants import CHUNK_SIZE
from ed2k.fileutil import ed2k_link, hash_file, hash_path


HELLO_BLUE = "aa010fbc1d14c795d86ef98c95479d17"
ONE_PATTERN_RED = "49e80f377b7e4e706dbd3ecc89f39306"
ONE_PATTERN_BLUE = "4127a47867b6110f0f86f2d9845fb374"


class FileUtilTests(unittest.TestCase):
    def test_hash_file_read_size_does_not_matter(self):
        data = b"\x55" * CHUNK_SIZE
        for read_size in (CHUNK_SIZE, 4096, 3_333_333):
            with self.subTest(read_size=read_size):
                size, digest = hash_file(io.BytesIO(data), "redblue", read_size=read_size)
                self.assertEqual(size, CHUNK_SIZE)
                self.assertEqual(digest.hex(), ONE_PATTERN_RED + ONE_PATTERN_BLUE)

    def test_hash_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "hello.txt"
            p.write_bytes(b"hello world")
            size, digest = hash_path(str(p))
            self.assertEqual(size, 11)
            self.assertEqual(digest.hex(), HELLO_BLUE)

    def test_link(self):
        link = ed2k_link("/some/dir/hello.txt", 11, bytes.fromhex(HELLO_BLUE))
        self.assertEqual(link, f"ed2k://|file|hello.txt|11|{HELLO_BLUE}|/")

    def test_link_rejects_bad_input(self):
        digest = bytes.fromhex(HELLO_BLUE)
        with self.assertRaises(ValueError):
            ed2k_link("a|b.txt", 1, digest)
        with self.assertRaises(ValueError):
            ed2k_link("a.txt", 1, digest * 2)
        with self.assertRaises(ValueError):
            ed2k_link("dir/", 1, digest)


class CLITests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        self.hello = self.root / "hello.txt"
        self.hello.write_bytes(b"hello world")
        self.boundary = self.root / "boundary.bin"
        self.boundary.write_bytes(b"\x55" * CHUNK_SIZE)

    def run_main(self, args):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            with self.assertRaises(SystemExit) as cm:
                main(list(args))
        return cm.exception.code, out.getvalue(), err.getvalue()

    def test_default_blue(self):
        code, out, _ = self.run_main([str(self.hello)])
        self.assertEqual(code, 0)
        self.assertEqual(out, f"{HELLO_BLUE}  {self.hello}\n")

    def test_variants(self):
        code, out, _ = self.run_main(["--variant", "red", str(self.boundary)])
        self.assertEqual(code, 0)
        self.assertIn(ONE_PATTERN_RED, out)
        code, out, _ = self.run_main(["--variant", "redblue", "-j", "2", str(self.boundary), str(self.hello)])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], f"{ONE_PATTERN_RED}{ONE_PATTERN_BLUE}  {self.boundary}")
        self.assertEqual(lines[1], f"{HELLO_BLUE}{HELLO_BLUE}  {self.hello}")

    def test_links(self):
        code, out, _ = self.run_main(["--link", "--variant", "redblue", str(self.boundary), str(self.hello)])
        self.assertEqual(code, 0)
        self.assertEqual(
            out.splitlines(),
            [
                f"ed2k://|file|boundary.bin|{CHUNK_SIZE}|{ONE_PATTERN_BLUE}|/",
                f"ed2k://|file|boundary.bin|{CHUNK_SIZE}|{ONE_PATTERN_RED}|/",
                f"ed2k://|file|hello.txt|11|{HELLO_BLUE}|/",
            ],
        )

    def test_json(self):
        missing = self.root / "missing.bin"
        code, out, _ = self.run_main(["--json", str(self.hello), str(missing), str(self.root)])
        self.assertEqual(code, 1)
        doc = json.loads(out)
        self.assertEqual((doc["ok"], doc["skipped"], doc["failed"]), (1, 1, 1))
        by_path = {r["path"]: r for r in doc["results"]}
        self.assertEqual(by_path[str(self.hello)]["hash"], HELLO_BLUE)
        self.assertEqual(by_path[str(self.hello)]["size"], 11)
        self.assertEqual(by_path[str(missing)]["status"], "fail")
        self.assertEqual(by_path[str(self.root)]["status"], "skipped")

    def test_directory_warning_and_quiet(self):
        code, out, err = self.run_main([str(self.root)])
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertIn("Warning:", err)
        code, _, err = self.run_main(["--quiet", str(self.root)])
        self.assertEqual(code, 0)
        self.assertEqual(err, "")

    def test_missing_file_fails(self):
        code, out, err = self.run_main([str(self.root / "nope"), str(self.hello)])
        self.assertEqual(code, 1)
        self.assertIn(HELLO_BLUE, out)
        self.assertIn("Error:", err)

    def test_only_input_missing_exits_one(self):
        code, out, err = self.run_main([str(self.root / "nope")])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Error:", err)
        self.assertIn("nope", err)

    def test_stdin_twice_is_fatal(self):
        code, _, err = self.run_main(["-", "-"])
        self.assertEqual(code, 2)
        self.assertIn("Standard input", err)


class CLISubprocessTests(unittest.TestCase):
    def run_cli(self, args, *, expect: int | None = 0, stdin: bytes = b""):
        cmd = [sys.executable, "-m", "ed2k.cli"] + list(args)
        env = os.environ.copy()
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(
            cmd,
            input=stdin,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\nSTDOUT:\n{proc.stdout!r}\nSTDERR:\n{proc.stderr!r}"
            )
        return proc

    def test_stdin(self):
        proc = self.run_cli(["-"], stdin=b"hello world")
        self.assertEqual(proc.stdout.decode().strip(), f"{HELLO_BLUE}  -")

    def test_stdin_link_fails(self):
        proc = self.run_cli(["--link", "-"], expect=1, stdin=b"hello world")
        self.assertIn(b"standard input", proc.stderr)


if __name__ == "__main__":
    unittest.main()
