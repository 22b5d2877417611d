
from setuptools import setup, find_packages

setup(
    name='pnr_converter',
    version='0.1.0',
    packages=find_packages(exclude=['tests']),
    package_data={'pnr_converter': ['options.yaml']},
    install_requires=[
        'beautifulsoup4',
        'click',
        'python-dateutil',
        'PyYAML',
        'regex',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pnr-converter=pnr_converter.cli:main'
        ]
    }
)
