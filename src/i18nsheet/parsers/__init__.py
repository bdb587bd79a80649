"""Readers and writers for JSON translation trees, CSV tables and XLSX workbooks."""
# SPDX-License-Identifier: GPL-3.0-or-later
