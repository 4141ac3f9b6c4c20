import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

packages = setuptools.find_packages(exclude=["tests", "tests.*"])
entry_points={
    'console_scripts': [
        'neatjs=neatjs.__main__:main',
    ],
}

setuptools.setup(
    name="neatjs",
    version="0.1.0",
    author="Nick Setzer",
    author_email="nicksetzer@github.com",
    description="whitespace preserving compiler for the neat javascript dialect",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/nsetzer/neatjs",
    packages=packages,
    entry_points=entry_points,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.6',
)
