#!/usr/bin/env python3

from setuptools import setup

version = '0.1.0'
license_str = 'MIT License'
description = 'Python library for synthesizing Kerberos keytab files from declarative principal and key entries'
package_name = 'keytab_provider'
package_folder = '.'

long_description = open('README.md', encoding='utf-8').read()
packages = ['keytab_provider',
            'keytab_provider.core',
            'keytab_provider.environment',
            'keytab_provider.environment.kerberos',
            ]


setup_kwargs = {
    'packages': packages,
    'package_dir': {'': package_folder},
}

requirements = ['pycryptodome>=3.9.0',
                'pytz',
                ]

test_requirements = ['hypothesis>=6.0.0',
                     'pytest>=7.0.0',
                     ]

setup(name=package_name,
      version=version,
      install_requires=requirements,
      extras_require={'test': test_requirements},
      license=license_str,
      description=description,
      long_description=long_description,
      long_description_content_type='text/markdown',
      keywords='python3 kerberos keytab krb5 terraform',
      python_requires=">=3.6",
      classifiers=['Development Status :: 3 - Alpha',
                   'Intended Audience :: Developers',
                   'Intended Audience :: System Administrators',
                   'License :: OSI Approved :: MIT License',
                   'Operating System :: OS Independent',
                   'Programming Language :: Python',
                   'Programming Language :: Python :: 3',
                   'Topic :: Security',
                   'Topic :: Software Development :: Libraries :: Python Modules',
                   'Topic :: System :: Systems Administration :: Authentication/Directory'],
      **setup_kwargs
      )
