from setuptools import setup
import re
v_file = "cnv_overlap/version.py"
v_line = open(v_file, "rt").read()
v_re = r"^__version__ = ['\"]([^'\"]*)['\"]"
match = re.search(v_re, v_line, re.M)
if match:
    verstr = match.group(1)
else:
    raise RuntimeError("Unable to find version string in {}.".format(v_file))

setup(
    name="cnv_overlap",
    packages=["cnv_overlap"],
    version=verstr,
    description="Similarity of CNV call sets by overlapping territory",
    author="David A. Parry",
    author_email="david.parry@igmm.ed.ac.uk",
    license='MIT',
    install_requires=['pysam', 'numpy'],
    extras_require={'test': ['pytest']},
    scripts=["bin/cnv_overlap"],
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        ],
)
