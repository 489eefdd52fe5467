"""
Setup script for the frustum-based view pair filtering package.
"""

from setuptools import setup, find_packages
import os


def read_readme():
    """Read README file for long description."""
    if os.path.exists('README.md'):
        with open('README.md', 'r', encoding='utf-8') as f:
            return f.read()
    return "Frustum-based view pair filtering for multi-view reconstruction"


# Core requirements (always installed)
install_requires = [
    'numpy>=1.19.0',
    'scipy>=1.9.0',
    'matplotlib>=3.3.0',
]

# Optional dependencies for different use cases
extras_require = {
    'dev': [
        'pytest>=6.0.0',
        'pytest-cov>=2.12.0',
        'black>=21.0.0',
        'isort>=5.9.0',
        'flake8>=3.9.0'
    ],
}

setup(
    name="frustum-filtering",
    version="1.0.0",
    description="Camera frustum overlap filtering of view pairs for 3D reconstruction",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=['FrustumFiltering', 'FrustumFiltering.*']),
    py_modules=['run_frustum_filtering'],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        'console_scripts': [
            'frustum-filter=run_frustum_filtering:main',
        ],
    },
    keywords=[
        "computer vision",
        "structure from motion",
        "multi-view stereo",
        "camera frustum",
        "view pair selection",
    ],
)
