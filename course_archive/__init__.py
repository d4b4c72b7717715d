# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Course archive backend: admin authentication plus course records and statistics."""
