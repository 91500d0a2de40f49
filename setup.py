"""
Tuckql - Lightweight fluent query builder for SQLite

Configure table, columns, joins, sort and limit, then run
SELECT / INSERT / UPDATE / DELETE without writing SQL for the common cases.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
def read_long_description():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return ""

# Define optional dependencies
extras_require = {
    # Alternative JSON implementations for row encode/decode
    'orjson': [
        'orjson>=3.6.0',
    ],
    'ujson': [
        'ujson>=5.4.0',
    ],

    # Test dependencies
    'test': [
        'pytest>=7.0.0',
    ],

    # Development dependencies
    'dev': [
        'mypy>=0.950',
        'build>=0.7.0',
        'twine>=4.0.0',
    ],
}

# All JSON implementations
extras_require['all'] = (
    extras_require['orjson'] +
    extras_require['ujson']
)

# Full development environment
extras_require['full'] = (
    extras_require['all'] +
    extras_require['test'] +
    extras_require['dev']
)

setup(
    name="tuckql",
    version="0.1.0",
    author="go9sky",
    author_email="",
    description="Lightweight fluent query builder and async execution shim for SQLite",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['examples', 'tests']),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Database",
        "Topic :: Database :: Front-Ends",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: AsyncIO",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Typing :: Typed",
    ],
    python_requires=">=3.10",

    # Core dependencies
    install_requires=[
        'aiosqlite>=0.17.0',
    ],

    # Optional dependencies
    extras_require=extras_require,

    keywords="sqlite query-builder asyncio aiosqlite sql lightweight tuckql",
)
