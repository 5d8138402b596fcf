"""School Admin Backend.

Administrative backend for a school: teachers, students and parents with
login accounts in a hosted identity provider, plus classes, subjects,
lessons, exams, assignments, results, attendance, events and announcements.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
