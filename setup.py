"""Install the Ella Rises web application."""

from setuptools import setup, find_packages

setup(
    name='ellarises',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    package_data={
        'ellarises': ['templates/*.html', 'templates/*/*.html',
                      'static/css/*.css']
    },
    install_requires=[
        "flask",
        "flask-sqlalchemy>=3.0",
        "sqlalchemy>=1.4",
        "wtforms>=3.0",
        "werkzeug",
        "pytz",
        "click",
        "bcrypt",
        "python-json-logger",
        "psycopg2-binary"
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis"
        ]
    },
    zip_safe=False
)
