# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User registration and token authentication service."""
