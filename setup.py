from setuptools import setup, find_packages

setup(
    name="earp",
    version="0.1",
    packages=find_packages(include=['earp', 'earp.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.17',
        'matplotlib',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
)
