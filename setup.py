from setuptools import setup, find_packages
import re

# Read version from taxpal/__init__.py
with open('taxpal/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='taxpal',
    version=version,
    packages=find_packages(include=['taxpal', 'taxpal.*']),
    package_data={
        'taxpal': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'taxpal=taxpal.cli.__main__:main',
            'taxpal-mcp=taxpal.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Freelancer income tracking and self-employment tax estimates.',
    python_requires='>=3.10',
)
