"""
Usage:
python get_app_name.py /path/to/app.aab [density]
"""
import sys

from pyaabparser import AAB

if len(sys.argv) < 2:
    print("Usage:\npython get_app_name.py /path/to/app.aab [density]")
    exit(1)

density = int(sys.argv[2]) if len(sys.argv) > 2 else None

with AAB.open(sys.argv[1]) as aab:
    app_name = aab.get_app_name(density)
    print('Package is "{}"'.format(aab.get_package()))
    print('App name is "{}"'.format(app_name if app_name else "Unknown"))
    print('Icon is "{}"'.format(aab.get_app_icon(density) or "Unknown"))
