# coding=utf-8
"""Python NVR client setup script."""
from setuptools import setup


def readme():
    with open('README.md') as desc:
        return desc.read()


setup(

    name='pynvr',
    version='0.3.0',
    packages=['pynvr', 'pynvr.core', 'pynvr.core.backend'],

    python_requires='>=3.9',
    install_requires=[
        'requests',
        'click',
        'cloudscraper>=1.2.58'
    ],
    extras_require={
        'tests': [
            'pytest',
        ],
    },

    description='PyNvr keeps a local, self refreshing copy of an NVR camera server\'s state.',
    long_description=readme(),
    long_description_content_type='text/markdown',
    license='LGPLv3+',
    keywords=[
        'nvr',
        'camera',
        'rtsp',
        'mosaic',
        'python',
    ],
    classifiers=[
        'Environment :: Other Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],

    entry_points={
        'console_scripts': [
            'pynvr = pynvr.main:main_func',
        ],
    },

    test_suite='tests',
)
