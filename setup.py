import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="gitpush",
    version="0.1.0",
    author="adi",
    author_email="your.email@example.com",
    description="A CLI that stages, commits with AI-generated messages, and pushes to GitHub.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/adiorinder/gitpush",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Version Control :: Git",
        "Environment :: Console",
    ],
    python_requires='>=3.8',
    install_requires=[
        'requests',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gitpush = gitpush.main:main',
        ],
    },
)
