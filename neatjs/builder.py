#! cd .. && python3 -m neatjs.builder
"""
compile a directory tree of neat files

every source file under the source directory is compiled into the
mirrored location under the destination directory. A file which fails to
compile does not stop the build, all errors are collected and reported
together once every file has been visited.
"""
import os
import sys
import logging

from .compiler import compile

log = logging.getLogger("neatjs.builder")

class BuildError(Exception):
    def __init__(self, errors):
        self.errors = sorted(str(e) for e in errors)
        super(BuildError, self).__init__("\n".join(self.errors))

class Builder(object):

    source_ext = ".neat"
    output_ext = ".js"

    def __init__(self, source_dir, dest_dir, declare=None,
      source_ext=None, output_ext=None):
        super(Builder, self).__init__()

        self.source_dir = source_dir
        self.dest_dir = dest_dir
        self.declare = declare

        if source_ext:
            self.source_ext = source_ext
        if output_ext:
            self.output_ext = output_ext

    def discover(self):
        """ return (source_path, output_path) for every source file """

        pairs = []
        for dirpath, dirnames, filenames in os.walk(self.source_dir):
            dirnames.sort()
            reldir = os.path.relpath(dirpath, self.source_dir)
            for name in sorted(filenames):
                if not name.endswith(self.source_ext):
                    continue
                base = name[:-len(self.source_ext)]
                src = os.path.join(dirpath, name)
                dst = os.path.normpath(os.path.join(
                    self.dest_dir, reldir, base + self.output_ext))
                pairs.append((src, dst))
        return pairs

    def build_file(self, src, dst):
        """ compile a single file, returns the CompileResult """

        with open(src, "r") as rf:
            text = rf.read()

        result = compile(src, text, self.declare)

        if result.ok:
            os.makedirs(os.path.dirname(dst) or ".", exist_ok=True)
            with open(dst, "w") as wf:
                wf.write(result.output)
            log.debug("compiled %s -> %s", src, dst)
        else:
            log.error("%s", result.error)

        return result

    def build(self):
        """ compile every file in the source tree

        returns the list of written paths, or raises BuildError if any file
        failed to compile
        """

        written = []
        errors = []
        for src, dst in self.discover():
            result = self.build_file(src, dst)
            if result.ok:
                written.append(dst)
            else:
                errors.append(result.error)

        log.info("compiled %d of %d files", len(written), len(written) + len(errors))

        if errors:
            raise BuildError(errors)

        return written

def main():  # pragma: no cover

    if len(sys.argv) != 3:
        sys.stderr.write("usage: %s src_dir dst_dir\n" % sys.argv[0])
        sys.exit(1)

    logging.basicConfig(level=logging.DEBUG, format='%(levelname)-8s - %(message)s')
    Builder(sys.argv[1], sys.argv[2]).build()

if __name__ == '__main__':  # pragma: no cover
    main()
