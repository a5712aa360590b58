from setuptools import find_packages, setup


setup(
    name = 'closeleak',
    version = '0.1.0',
    description = 'Report resources that are not closed explicitly',
    license = 'MIT',
    packages = find_packages(exclude=['tests*']),
    python_requires = '>=3.10',
    install_requires = ['startup'],
)
