"""
setuptools build script for the mdp_gym package.

Runtime dependencies come from requirements.txt and development tooling from
requirements-dev.txt. The version is read from the package's
``config/constants.yaml`` without importing the package, so building does not
require the runtime dependencies to be installed.
"""

import pathlib
import re

import setuptools

HERE = pathlib.Path(__file__).parent
PACKAGE_DIR = HERE / 'mdp_gym'
CONSTANTS_PATH = PACKAGE_DIR / 'config' / 'constants.yaml'
README_PATH = HERE / 'README.md'
REQUIREMENTS_PATH = HERE / 'requirements.txt'
DEV_REQUIREMENTS_PATH = HERE / 'requirements-dev.txt'

PACKAGE_NAME = 'mdp-gym'
AUTHOR = 'mdp_gym Development Team'
DESCRIPTION = 'Gym-style environment contract, spaces and a tabular MDP engine for reinforcement learning'
LICENSE = 'MIT'

KEYWORDS = [
    'reinforcement learning', 'gym', 'gymnasium', 'markov decision process',
    'mdp', 'environment', 'simulation'
]

CLASSIFIERS = [
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Science/Research',
    'Topic :: Scientific/Engineering :: Artificial Intelligence',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
    'Programming Language :: Python :: 3.13',
]

TEST_REQUIREMENTS = [
    'pytest>=8.0.0',
    'hypothesis>=6.100.0',
]


def read_requirements(requirements_file: pathlib.Path) -> list:
    """
    Read a requirements file into a list of requirement strings, dropping
    blank lines, comments and ``-r`` includes.

    Example:
        core_deps = read_requirements(HERE / 'requirements.txt')
    """
    if not requirements_file.exists():
        return []

    requirements = []
    for line in requirements_file.read_text(encoding='utf-8').splitlines():
        line = line.split('#')[0].strip()
        if not line or line.startswith('-r'):
            continue
        requirements.append(line)
    return requirements


def read_long_description() -> str:
    if README_PATH.exists():
        return README_PATH.read_text(encoding='utf-8')
    return DESCRIPTION


def get_version_from_package() -> str:
    """
    Extract ``package.version`` from config/constants.yaml with a regular
    expression, keeping setup.py free of a build-time pyyaml dependency.
    """
    content = CONSTANTS_PATH.read_text(encoding='utf-8')
    match = re.search(r'^\s+version:\s*["\']?([0-9][^"\'\s]*)', content, re.MULTILINE)
    if match is None:
        raise RuntimeError(f"No package version found in {CONSTANTS_PATH}")
    return match.group(1)


def setup_package():
    version = get_version_from_package()

    setuptools.setup(
        name=PACKAGE_NAME,
        version=version,
        description=DESCRIPTION,
        long_description=read_long_description(),
        long_description_content_type='text/markdown',
        author=AUTHOR,
        license=LICENSE,
        keywords=KEYWORDS,
        classifiers=CLASSIFIERS,
        packages=setuptools.find_packages(include=['mdp_gym', 'mdp_gym.*']),
        install_requires=read_requirements(REQUIREMENTS_PATH),
        extras_require={
            'test': TEST_REQUIREMENTS,
            'dev': read_requirements(DEV_REQUIREMENTS_PATH),
        },
        package_data={'mdp_gym': ['config/*.yaml']},
        python_requires='>=3.10',
        zip_safe=False,
        include_package_data=True,
    )


if __name__ == '__main__':
    setup_package()
