import re

from setuptools import setup, find_packages

with open('biojtools/__version.py') as version_file:
    __version__ = re.search(r"__version__ = '([^']+)'", version_file.read()).group(1)

with open('README.md') as readme:
    setup(
        name='biojtools',
        version=__version__,
        packages=find_packages(exclude=('tests', 'tests.*')),
        long_description=readme.read(),
        long_description_content_type='text/markdown',
        license='MIT',
        description='Streaming statistics, identifier filtering, and interval Jaccard for FASTQ/FASTA, SAM/BAM, and BED files',
        python_requires='>=3.8',
        install_requires=[
            'numba',
            'numpy',
        ],
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': ['bjt=biojtools.cli:main'],
        },
        include_package_data=True
    )
