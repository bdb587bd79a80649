"""i18nsheet: convert JSON translation folders to spreadsheets and back."""
# SPDX-License-Identifier: GPL-3.0-or-later

__version__ = "1.0.0"

APP_NAME = "i18nsheet"
