import os
from setuptools import setup, find_packages

version = open('VERSION').read().rstrip()

install_requires = [
    'docopt',
    'numpy',
    'pandas',
    'scikit-learn',
    'scipy',
    ]

tests_require = [
    'pytest',
    'pytest-cov',
    ]

here = os.path.abspath(os.path.dirname(__file__))
try:
    README = open(os.path.join(here, 'README.rst'), encoding='utf-8').read()
except IOError:
    README = ''


setup(name='bayespipe',
      version=version,
      description='Train, store and apply Naive Bayes classifiers '
                  'on ARFF and tabular data',
      long_description=README,
      license='Apache License, Version 2.0',
      classifiers=[
          'Development Status :: 3 - Alpha',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: Apache Software License',
          'Programming Language :: Python :: 3',
      ],
      packages=find_packages(exclude=['examples', 'examples.*']),
      include_package_data=True,
      zip_safe=False,
      install_requires=install_requires,
      extras_require={
          'testing': tests_require,
          },
      entry_points={
          'console_scripts': [
              'bayespipe-classify = bayespipe.predict:classify_cmd',
              'bayespipe-fit = bayespipe.fit:fit_cmd',
              'bayespipe-run = bayespipe.pipeline:run_cmd',
              'bayespipe-test = bayespipe.eval:test_cmd',
              'bayespipe-version = bayespipe.util:version_cmd',
              ],
          },
      )
