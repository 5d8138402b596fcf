# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer.

Domains:
    auth: Password hashing for local person rows.
    provisioning: Identity-backed teachers, students and parents.
    records: Single-table school records and the exam access policy.
"""
