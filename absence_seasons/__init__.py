"""
absence_seasons package: seasonal school absence charts from daily attendance CSVs.
"""

from .data import *
from .utils import *
from .runner import *

__version__ = "1.0.0"
