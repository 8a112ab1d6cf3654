import os

import pytest


WEATHER_NOMINAL = """\
@relation weather.symbolic

@attribute outlook {sunny, overcast, rainy}
@attribute temperature {hot, mild, cool}
@attribute humidity {high, normal}
@attribute windy {TRUE, FALSE}
@attribute play {yes, no}

@data
sunny,hot,high,FALSE,no
sunny,hot,high,TRUE,no
overcast,hot,high,FALSE,yes
rainy,mild,high,FALSE,yes
rainy,cool,normal,FALSE,yes
rainy,cool,normal,TRUE,no
overcast,cool,normal,TRUE,yes
sunny,mild,high,FALSE,no
sunny,cool,normal,FALSE,yes
rainy,mild,normal,FALSE,yes
sunny,mild,normal,TRUE,yes
overcast,mild,high,TRUE,yes
overcast,hot,normal,FALSE,yes
rainy,mild,high,TRUE,no
"""

WEATHER_NUMERIC = """\
@relation weather

@attribute outlook {sunny, overcast, rainy}
@attribute temperature numeric
@attribute humidity numeric
@attribute windy {TRUE, FALSE}
@attribute play {yes, no}

@data
sunny,85,85,FALSE,no
sunny,80,90,TRUE,no
overcast,83,86,FALSE,yes
rainy,70,96,FALSE,yes
rainy,68,80,FALSE,yes
rainy,65,70,TRUE,no
overcast,64,65,TRUE,yes
sunny,72,95,FALSE,no
sunny,69,70,FALSE,yes
rainy,75,80,FALSE,yes
sunny,75,70,TRUE,yes
overcast,72,90,TRUE,yes
overcast,81,75,FALSE,yes
rainy,71,91,TRUE,no
"""

WEATHER_UNKNOWN = """\
@relation weather.symbolic.unknown

@attribute outlook {sunny, overcast, rainy}
@attribute temperature {hot, mild, cool}
@attribute humidity {high, normal}
@attribute windy {TRUE, FALSE}
@attribute play {yes, no}

@data
sunny,cool,high,TRUE,?
overcast,mild,normal,FALSE,?
rainy,hot,?,TRUE,?
"""


@pytest.fixture(autouse=True)
def config(request):
    from bayespipe.config import _config

    orig = _config.copy()
    _config.clear()
    _config.initialized = False
    request.addfinalizer(
        lambda: (_config.clear(), _config.update(orig)))
    return _config


@pytest.fixture
def weather_nominal_path(tmpdir):
    path = tmpdir.join('weather.nominal.arff')
    path.write(WEATHER_NOMINAL)
    return str(path)


@pytest.fixture
def weather_numeric_path(tmpdir):
    path = tmpdir.join('weather.numeric.arff')
    path.write(WEATHER_NUMERIC)
    return str(path)


@pytest.fixture
def weather_unknown_path(tmpdir):
    path = tmpdir.join('weather.unknown.arff')
    path.write(WEATHER_UNKNOWN)
    return str(path)


@pytest.fixture
def weather_nominal(weather_nominal_path):
    from bayespipe.dataset import load_dataset
    return load_dataset(weather_nominal_path)


@pytest.fixture
def weather_numeric(weather_numeric_path):
    from bayespipe.dataset import load_dataset
    return load_dataset(weather_numeric_path)


@pytest.fixture
def weather_unknown(weather_unknown_path):
    from bayespipe.dataset import load_dataset
    return load_dataset(weather_unknown_path)


def pytest_configure(config):
    # Don't allow accidental BAYESPIPE_CONFIGs to leak into tests:
    os.environ.pop('BAYESPIPE_CONFIG', None)
