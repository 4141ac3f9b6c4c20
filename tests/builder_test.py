#! cd .. && python3 -m tests.builder_test

import os
import shutil
import tempfile
import unittest

from neatjs.builder import Builder, BuildError

class BuilderTestCase(unittest.TestCase):

    def setUp(self):
        self.root = tempfile.mkdtemp()
        self.src = os.path.join(self.root, "src")
        self.dst = os.path.join(self.root, "build")

    def tearDown(self):
        shutil.rmtree(self.root)

    def _write(self, relpath, text):
        path = os.path.join(self.src, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as wf:
            wf.write(text)
        return path

    def _read(self, relpath):
        with open(os.path.join(self.dst, relpath)) as rf:
            return rf.read()

    def test_001_mirror(self):
        self._write("main.neat", "var a = 1 == 2;\n")
        self._write("lib/util.neat", "f(x) { return x; }\n")
        self._write("lib/notes.txt", "not compiled")

        written = Builder(self.src, self.dst).build()

        self.assertEqual(sorted(written), sorted([
            os.path.join(self.dst, "lib", "util.js"),
            os.path.join(self.dst, "main.js"),
        ]))
        self.assertEqual(self._read("main.js"), "var a = 1 === 2;\n")
        self.assertEqual(self._read("lib/util.js"), "function f(x) { return x; }\n")
        self.assertFalse(os.path.exists(os.path.join(self.dst, "lib", "notes.js")))

    def test_002_errors_are_collected(self):
        bad_b = self._write("b.neat", "\nx;\n")
        bad_a = self._write("a/a.neat", "var y;\nvar y;\n")
        self._write("ok.neat", "var z;\n")

        with self.assertRaises(BuildError) as ctx:
            Builder(self.src, self.dst).build()

        expected = sorted([
            "%s, line 2: 'x' has not been declared" % bad_b,
            "%s, line 2: 'y' is already declared in this scope" % bad_a,
        ])
        self.assertEqual(ctx.exception.errors, expected)
        self.assertEqual(str(ctx.exception), "\n".join(expected))

        # files which compiled are still written
        self.assertTrue(os.path.exists(os.path.join(self.dst, "ok.js")))
        self.assertFalse(os.path.exists(os.path.join(self.dst, "b.js")))

    def test_003_extensions(self):
        self._write("main.njs", "var a;\n")
        self._write("skip.neat", "var b;\n")

        written = Builder(self.src, self.dst,
            source_ext=".njs", output_ext=".mjs").build()

        self.assertEqual(written, [os.path.join(self.dst, "main.mjs")])

    def test_004_declare(self):
        self._write("main.neat", "require('x');\n")
        with self.assertRaises(BuildError):
            Builder(self.src, self.dst).build()
        Builder(self.src, self.dst, declare=['require']).build()
        self.assertEqual(self._read("main.js"), "require('x');\n")

def main():
    unittest.main()

if __name__ == '__main__':
    main()
