import io

from setuptools import find_packages, setup

with io.open('calysto_xy/_version.py', encoding="utf-8") as fid:
    for line in fid:
        if line.startswith('__version__'):
            __version__ = line.strip().split()[-1][1:-1]
            break

with io.open('README.md', encoding="utf-8") as f:
    readme = f.read()

setup(name='calysto_xy',
      version=__version__,
      description='An XY machine assembly language kernel for Jupyter based on MetaKernel',
      long_description=readme,
      long_description_content_type='text/markdown',
      author='Douglas Blank',
      author_email='doug.blank@gmail.com',
      url="https://github.com/Calysto/calysto_xy",
      install_requires=["metakernel", "jupyter_client"],
      extras_require={'test': ["pytest"]},
      packages=find_packages(include=["calysto_xy", "calysto_xy.*"]),
      python_requires='>=3.6',
      classifiers = [
          'Framework :: IPython',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Assembly',
          'Topic :: Education',
          'Topic :: System :: Emulators',
      ]
)
