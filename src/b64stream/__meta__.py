# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Package metadata for b64stream."""


__appname__     = 'b64stream'
__version__     = '0.3.0'
__authors__     = ['Ernest R. Ewert', ]
__developer__   = 'Ernest R. Ewert'
__contact__     = 'b64stream@users.noreply.github.com'
__license__     = 'Apache License 2.0'
__website__     = 'https://github.com/b64stream/b64stream'
__copyright__   = 'b64stream developers 2014-2026'
__description__ = 'Tolerant, streaming base64 encoding and decoding with custom alphabets.'
__keywords__    = 'base64 base64url encoding decoding streaming codec'
