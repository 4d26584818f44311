import os
from bsvalias import __name__, __version__
from setuptools import setup, find_packages

BASE = os.path.dirname(__file__)
with open(os.path.join(BASE, 'README.md'), encoding='utf-8') as fh:
    long_description = fh.read()


setup(
    name=__name__,
    version=__version__,
    description="Client for bsvalias payment destination and payment request capabilities",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="bitcoin bsvalias paymail payment",
    license='MIT',
    python_requires='>=3.8',
    packages=find_packages(exclude=('tests', 'tests.*')),
    zip_safe=False,
    entry_points={
        'console_scripts': [
            'bsvalias=bsvalias.cli:main',
        ],
    },
    install_requires=[
        'aiohttp>=3.8',
        'appdirs>=1.4.3',
        'coincurve>=15.0.0',
        'ecdsa>=0.14',
        'pyyaml>=5.3.1',
    ],
    extras_require={
        'lint': [
            'pylint'
        ],
        'test': [
            'coverage',
        ],
    },
    classifiers=[
        'Framework :: AsyncIO',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
