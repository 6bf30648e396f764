from setuptools import setup, find_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*[^=]+)?=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(rel_path)
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='token-resolver',
    version=file_getVersion('tokenresolver/tokres.py'),
    description='Configurable parsing and resolution of structured tokens in text',
    author='FNNDSC',
    author_email='rudolph.pienaar@childrens.harvard.edu',
    url='https://github.com/FNNDSC/token-resolver',
    packages=find_packages(include=['tokenresolver', 'tokenresolver.*']),
    python_requires='>=3.11',
    install_requires=[
        'appdirs',
        'click>=8.0',
        'loguru',
        'pydantic>=2.0',
        'pydantic-settings>=2.2',
        'rich',
    ],
    license='MIT',
    entry_points={
        'console_scripts': [
            'tokres = tokenresolver.tokres:main'
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Text Processing',
        'Topic :: Software Development :: Libraries',
    ],
    extras_require={
        'none': [],
        'test': [
            'pytest>=7.1'
        ],
        'dev': [
            'pytest>=7.1'
        ]
    }
)
