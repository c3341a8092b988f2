from setuptools import setup

setup(
    name='pySmsPdu',
    version='1.0',
    packages=[
        'pySmsPdu',
    ],
    license='GPLv2',
    description='Decoder for SMS PDUs (SMS-DELIVER / SMS-SUBMIT) including UDH, EMS and WAP push',
    install_requires=[
        "cmd2 >= 1.5.0, < 3",
        "construct >= 2.10.70",
        "gsm0338",
        "pyosmocom >= 0.0.9",
        "packaging",
        "requests",
    ],
    scripts=[
        'pySmsPdu-decode.py',
    ],
    zip_safe=False,
    python_requires=">=3.7",
)
