# nestfsm/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Callable

# Callback Types
Listener = Callable[..., None]
Guard = Callable[..., bool]
