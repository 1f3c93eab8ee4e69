# -*- coding: utf-8; -*-

import io
import os

from setuptools import setup


metadata = {}
with io.open(os.path.join('webheaders', '__metadata__.py'), 'rb') as f:
    exec(f.read(), metadata)            # pylint: disable=exec-used

with io.open('README.rst') as f:
    long_description = f.read()

setup(
    name='webheaders',
    version=metadata['version'],
    description='Parsers for the Link and Accept headers '
                'and for problem details',
    long_description=long_description,
    license='MIT',

    python_requires='>=3.6',
    install_requires=[
        'bitstring >= 3.1.4',
    ],
    extras_require={
        'test': [
            'pytest >= 3.0',
        ],
    },

    packages=[
        'webheaders',
        'webheaders.syntax',
        'webheaders.util',
    ],
    entry_points={
        'console_scripts': [
            'webheaders=webheaders.cli:main',
        ],
    },
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Internet :: WWW/HTTP',
    ],
    keywords='HTTP header Link Accept content negotiation problem RFC',
)
