#!/usr/bin/env python
# -*- coding: utf-8 -*-
from setuptools import setup

# There are problems running setup.py on Windows if the encoding is not set
with open('README.md', encoding='utf8') as readme_file:
    readme = readme_file.read()


setup(
    name='sentry-sender',
    version='0.4.0',
    description="Delivers error events to a Sentry store endpoint with retries and backoff.",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=[
        'sentry_sender',
        'sentry_sender.config',
    ],
    package_dir={'sentry_sender': 'sentry_sender'},
    entry_points={
        'console_scripts': [
            'sentry-sender=sentry_sender.cli:cli'
        ]
    },
    include_package_data=True,
    install_requires=[
        'certifi',
        'httpx>=0.26',
        'pydantic>=2',
        'rich',
        'tenacity>=8',
        'typer>=0.9',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    python_requires=">=3.9",
    license="MIT license",
    zip_safe=False,
    keywords='sentry',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ]
)
