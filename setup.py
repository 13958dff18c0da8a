import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="mpfs2",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="MPFS2 filesystem images for humans",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/mpfs2",
    packages=setuptools.find_packages(exclude=['tests']),
    scripts=['scripts/mpfs2tool.py'],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    python_requires='>=3.7',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
