# flake8: noqa: F403
# isort: off
from .traversal import *
from ._utils import *
