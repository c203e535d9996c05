from setuptools import find_packages, setup

__VERSION__ = '0.1.0'

with open("README.rst", "r") as fh:
    long_description = fh.read()

setup(
    name='pyaabparser',
    version=__VERSION__,

    author='Subho Halder',
    author_email='sunny@appknox.com',
    license='Apache License 2.0',

    packages=find_packages(exclude=['tests', 'examples']),
    include_package_data=True,
    zip_safe=False,
    platforms='any',
    python_requires='>=3.8',
    install_requires=['lxml', 'protobuf>=4.22', 'Pillow>=8.0'],
    extras_require={
        'test': ['pytest'],
    },
    description="Python3 Parser for Android App Bundles to get package, version, label and icon",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    keywords='appknox aab android app bundle aapt2 protobuf',
    classifiers=[
        'Development Status :: 4 - Beta',

        'Intended Audience :: Developers',

        'License :: OSI Approved :: Apache Software License',

        'Operating System :: POSIX',
        'Operating System :: MacOS',
        'Operating System :: Unix',

        'Programming Language :: Python',
        'Programming Language :: Python :: 3',

        'Topic :: Software Development :: Build Tools',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ]
)
