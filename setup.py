#!/usr/bin/env python

from setuptools import setup, find_packages


setup(
    name='legitcheck',
    version='1.0',
    license='MIT',

    description='legitcheck',
    long_description='Read legit check posts from a subreddit, score the comment threads with weighted keyword votes and keep the posts whose community verdict is clearly authentic or counterfeit',
    url='https://github.com/legitcheck/legitcheck',

    classifiers=['Development Status :: 1 - Alpha',
                 'Intended Audience :: End Users/Desktop',
                 'License :: OSI Approved :: MIT License',
                 'Topic :: Internet :: WWW/HTTP',
                 'Programming Language :: Python :: 3',
                 'Programming Language :: Python :: 3.11',
                 'Environment :: Console',
                 ],
    keywords = ['legitcheck', 'reddit', 'legit check', 'authenticity', 'verdict', 'comments'],
    platforms=['Any'],

    scripts=[],
    provides=[],
    python_requires='>=3.8',
    install_requires=['requests', 'rich'],
    extras_require={
        'test': ['pytest'],
    },
    packages=find_packages(include=['legitcheck', 'legitcheck.*']),
    include_package_data=True,

    entry_points={
        'console_scripts': [
            'legitcheck = legitcheck.cli:main'
        ],
    },
)
