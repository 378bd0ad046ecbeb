import re
from pathlib import Path

from setuptools import setup

version = re.search(r"__version__ = '(.*?)'", Path(__file__).with_name('schemautils').joinpath('__init__.py').read_text()).group(1)

setup(
    name='schemautils',
    description='JSON Schema Utilities.',
    version=version,
    url='N/A',
    author='ycyuxin',
    author_email='ycyuxin(at)qq.com',
    packages=['schemautils'],
    entry_points={
        'console_scripts':
            [
                'schemagen = schemautils.schemagen:run',
                'schemamerge = schemautils.schemamerge:run',
            ]
    },
    install_requires=[
        'click',
        'jsonschema>=4',
        'PyYAML',
        'pyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.7',
    zip_safe=False
)
