"""getopt_p package install script"""

import sys

from setuptools import Command, setup


class test(Command):
    # Original version of this class posted
    # by Berthold Hoellmann to distutils-sig@python.org
    description = "run tests"

    user_options = [
        ('tests=', 't', "comma-separated list of packages that contain test modules"),
        ('mask=', 'm', "file name pattern of the test modules to run"),
    ]

    def initialize_options(self):
        self.tests = "getopt_p.test"
        self.mask = "test_*.py"
        self.failure = False

    def finalize_options(self):
        self.tests = self.tests.split(",")

    def run(self):
        build = self.reinitialize_command('build')
        build.run()
        if build.build_lib is not None:
            sys.path.insert(0, build.build_lib)

        import getopt_p.test

        for name in self.tests:
            package = __import__(name, globals(), locals(), ['*'])
            sys.stdout.write("Testing package %s %s\n" % (name, (sys.version, sys.platform)))
            package_failure = getopt_p.test.run_tests(package, self.mask, self.verbose)
            self.failure = self.failure or package_failure


if __name__ == '__main__':
    dist = setup(
        cmdclass={
            'test': test,
        },
    )
    # Exit with a failure code if only running the tests and they failed
    if dist.commands == ['test']:
        command = dist.command_obj['test']
        sys.exit(command.failure)
