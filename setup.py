import os
from setuptools import setup

from soundmush import __version__


HERE = os.path.abspath(os.path.dirname(__file__))
README = os.path.join(HERE, "README.rst")
REQS = os.path.join(HERE, "requirements.txt")

classifiers = [
    'License :: OSI Approved :: Apache Software License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Natural Language :: English',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'Intended Audience :: Education',
    'Intended Audience :: Information Technology',
    'Programming Language :: Python :: 3',
    'Topic :: Multimedia :: Sound/Audio :: Conversion',
]

with open(README, 'r') as f:
    long_description = f.read()

deps = []
with open(REQS, 'r') as f:
    deps = [x.strip() for x in f.read().split('\n')
            if x.strip() and not x.strip().startswith('#')]

setup(
    name='sound-mush',
    version=__version__,
    description=('Wraps arbitrary bytes in a WAV header as 8-bit mono audio'),
    long_description=long_description,
    long_description_content_type='text/x-rst',
    license='Apache 2.0',
    packages=['soundmush'],
    classifiers = classifiers,
    python_requires='>=3.8',
    install_requires=deps,
    extras_require={
        'test': ['pytest', 'soundfile'],
    },
    entry_points={
        'console_scripts': ['sound-mush=soundmush.__main__:main'],
    }
)
