#!/usr/bin/env python

from setuptools import setup

schemepeg_version = '0.1.0'

setup(name='schemepeg',
      version=schemepeg_version,
      description='an ordered-choice grammar for R7RS-flavoured Scheme',
      author='Eric Siedel, Michael Walter, N Lance Hepler',
      packages=[
        'schemepeg',
        'schemepeg.parser'
      ],
      package_dir={
        'schemepeg': 'schemepeg',
      },
      install_requires=[
        'pyPEG2',
      ],
      extras_require={
        'test': ['pytest'],
      }
     )
