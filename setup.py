import re
from setuptools import setup, find_packages

with open("./README.md", "r") as f:
    description = f.read()

with open("./requirements.txt", 'r') as f:
    requirements = f.read().splitlines()

with open("./cubesearch/__init__.py", 'r') as f:
    metadata = dict(re.findall(r'^__(version|author)__ = "([^"]*)"', f.read(), re.M))

setup(
    name="cubesearch",
    version=metadata["version"],
    author=metadata["author"],
    author_email='singhvi.vivaan@gmail.com',
    description="An IDA* search engine for solving the 3x3 Rubik's cube in Python",
    long_description=description,
    long_description_content_type="text/markdown",
    license='MIT',
    packages=find_packages(include=["cubesearch", "cubesearch.*"]),
    python_requires='>=3.9',
    include_package_data=True,
    install_requires=requirements,
    extras_require={"test": ["pytest"]}
)
