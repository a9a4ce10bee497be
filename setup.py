from setuptools import setup, find_packages
import re

# Read version from salarycalc/__init__.py
with open('salarycalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='salary-calc',
    version=version,
    packages=find_packages(include=['salarycalc', 'salarycalc.*']),
    package_data={
        'salarycalc.sdk.jurisdictions': ['data/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'salary-calc=salarycalc.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Italian net pay and employer cost simulator (2025 tax rules).',
    python_requires='>=3.10',
)
