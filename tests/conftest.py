import pytest

from lequel import LanguageIdentifier, build_language_profile

ENGLISH_CORPUS = [
    "The quick brown fox jumps over the lazy dog.",
    "This is the house that Jack built, and the cat that lived in the house.",
    "There are three things that I would like to say to the people of this town.",
    "What is the weather like where you live? It is raining here again.",
    "They thought that the train would be late, but it was on time.",
]

SPANISH_CORPUS = [
    "El perro come la comida en la casa de los abuelos.",
    "Los niños juegan en el parque todos los días por la tarde.",
    "La ciudad es muy bonita y tiene muchas calles con árboles.",
    "Mañana vamos a ir a la playa con nuestros amigos del colegio.",
    "¿Qué hora es? Creo que ya es demasiado tarde para salir.",
]


@pytest.fixture
def english_profile():
    return build_language_profile('en', ENGLISH_CORPUS)


@pytest.fixture
def spanish_profile():
    return build_language_profile('es', SPANISH_CORPUS)


@pytest.fixture
def identifier():
    identifier = LanguageIdentifier()
    identifier.train_language('en', ENGLISH_CORPUS)
    identifier.train_language('es', SPANISH_CORPUS)
    return identifier
