from setuptools import find_packages, setup  # noqa

extras_require = {
    "test": [
        "hypothesis",
        "pytest",
    ],
}

__version__ = "0.0.0+develop"

setup(
    name="dockerbuild",
    version=__version__,
    packages=find_packages(
        include=["dockerbuild", "dockerbuild.*"],
        exclude=["tests*"],
    ),
    include_package_data=True,
    description="Build and analyze docker images of the projects in a workspace",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    entry_points={
        "console_scripts": [
            "dockerbuild=dockerbuild.clis.main:main",
        ]
    },
    install_requires=[
        # Please maintain an alphabetical order in the following list
        "click>=6.6,<9.0",
        "mashumaro>=3.9.1",
        "python-json-logger>=3.1.0",
        "pyyaml!=6.0.0,!=5.4.0,!=5.4.1",  # pyyaml is broken with cython 3: https://github.com/yaml/pyyaml/issues/601
        "rich",
        "rich_click",
    ],
    extras_require=extras_require,
    license="apache2",
    python_requires=">=3.8",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
    ],
)
