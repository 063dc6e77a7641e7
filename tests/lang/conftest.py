import pytest

from tmin.lang import get_language


@pytest.fixture(scope="module")
def python_lang():
    return get_language("python")


@pytest.fixture(scope="module")
def java_lang():
    return get_language("java")


@pytest.fixture(scope="module")
def js_lang():
    return get_language("javascript")
