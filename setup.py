import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name='astrotext',
    version='2026.1019.0',
    author='Bo Zhang',
    author_email='bozhang@nao.cas.cn',
    description='Astronomical angle and time text conversions.',  # short description
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=["astrotext", "astrotext.*"]),
    license='MIT',
    classifiers=["Development Status :: 4 - Beta",
                 "Intended Audience :: Science/Research",
                 "License :: OSI Approved :: MIT License",
                 "Operating System :: OS Independent",
                 "Programming Language :: Python :: 3.9",
                 "Topic :: Scientific/Engineering :: Astronomy"],
    package_dir={'astrotext': 'astrotext'},
    package_data={"astrotext": ["config/*.toml"],
                  "": ["LICENSE"]
                  },
    python_requires=">=3.9",
    install_requires=['numpy', 'astropy', 'toml', 'tzdata'],
    extras_require={"test": ["pytest"]},
)
