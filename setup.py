#!/usr/bin/env python
# -*- coding: utf-8 -*-

import io
import os

from setuptools import find_packages, setup

# Package meta-data.
NAME = 'tabgroup'
DESCRIPTION = 'Group browser tabs by domain and title keywords from the command line'
URL = 'https://github.com/tabgroup/tabgroup'
EMAIL = 'tabgroup@users.noreply.github.com'
AUTHOR = 'tabgroup contributors'

here = os.path.abspath(os.path.dirname(__file__))


def read_requirements(filename):
    with io.open(os.path.join(here, 'requirements', filename), encoding='utf-8') as f:
        return [line.strip() for line in f
                if line.strip() and not line.startswith(('#', '-r'))]


# What packages are required for this module to be executed?
REQUIRED = read_requirements('base.txt')
EXTRAS = {
    'test': read_requirements('dev.txt'),
}

try:
    with io.open(os.path.join(here, 'README.md'), encoding='utf-8') as f:
        long_description = '\n' + f.read()
except FileNotFoundError:
    long_description = DESCRIPTION

# Load the package's __version__.py module as a dictionary.
about = {}
with open(os.path.join(here, NAME, '__version__.py')) as f:
    exec(f.read(), about)

packages = find_packages(
    include=(
        'tabgroup',
        'tabgroup.tests',
        'tabgroup.mediator',
    ),
)


# Where the magic happens:
setup(
    name=NAME,
    version=about['__version__'],
    description=DESCRIPTION,
    long_description=long_description,
    long_description_content_type='text/markdown',
    author=AUTHOR,
    author_email=EMAIL,
    url=URL,
    packages=packages,
    entry_points={
        'console_scripts': [
            'tabgroup=tabgroup.main:main',
            'tg=tabgroup.main:main',
            'tg_mediator=tabgroup.mediator.tabgroup_mediator:main',
        ],
    },
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    python_requires='>=3.7',
    include_package_data=True,
    license='MIT',
    classifiers=[
        # Trove classifiers
        # Full list: https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython'
    ],
)
