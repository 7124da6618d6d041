# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt
