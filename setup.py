import os
import re
import subprocess
from setuptools import setup, find_packages, Command

root_dir = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(root_dir, 'pcprobe', 'app_version.py')) as f:
    version = re.search(r"^version = '(.*)'$", f.read(), re.M).group(1)


class Coverage(Command):
    description = 'run tests with code coverage'
    user_options = [
        ('test-suite=', 's',
         "test suite to run (e.g. 'some_module.test_suite')"),
    ]

    def initialize_options(self):
        self.test_suite = None

    def finalize_options(self):
        pass

    def run(self):
        env = dict(os.environ)
        env['COVERAGE_FILE'] = os.path.join(root_dir, '.coverage')

        subprocess.run(['coverage', 'erase'], check=True)
        subprocess.run(
            ['coverage', 'run', '-m', 'unittest', 'discover'] +
            (['-q'] if self.verbose == 0 else []) +
            (['-s', self.test_suite] if self.test_suite else []),
            env=env, check=True
        )


with open(os.path.join(root_dir, 'README.md'), 'r') as f:
    # Read from the file and strip out the badges.
    long_desc = re.sub(r'(^# pcprobe.*)\n\n(.+\n)*', r'\1', f.read())

setup(
    name='pcprobe',
    version=version,

    description=('Find build flags for native libraries with incomplete ' +
                 'pkg-config metadata'),
    long_description=long_desc,
    long_description_content_type='text/markdown',
    keywords='pkg-config build flags',

    classifiers=[
        'Development Status :: 3 - Alpha',

        'Intended Audience :: Developers',

        'Topic :: Software Development :: Build Tools',

        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    packages=find_packages(exclude=['test', 'test.*']),
    package_data={'pcprobe': ['data/*.yml']},

    python_requires='>=3.9',
    install_requires=['colorama', 'importlib_resources', 'pyyaml', 'verspec'],
    extras_require={
        'dev': ['coverage', 'flake8 >= 3.7', 'flake8-quotes'],
        'test': ['coverage', 'flake8 >= 3.7', 'flake8-quotes'],
    },

    entry_points={
        'console_scripts': [
            'pcprobe=pcprobe.driver:main',
        ],
    },

    cmdclass={'coverage': Coverage},
)
