import pytest

from finantech.documents import (
    clean_document,
    format_document,
    is_valid_cnpj,
    is_valid_cpf,
    is_valid_document,
)


@pytest.mark.parametrize("doc", ["529.982.247-25", "52998224725", "11.222.333/0001-81", "11222333000181"])
def test_valid_documents(doc):
    assert is_valid_document(doc)


@pytest.mark.parametrize(
    "doc",
    [
        "111.111.111-11",
        "00000000000",
        "11.111.111/1111-11",
        "529.982.247-26",
        "11.222.333/0001-82",
        "1234",
        "",
    ],
)
def test_invalid_documents(doc):
    assert not is_valid_document(doc)


def test_cpf_and_cnpj_validators_check_length():
    assert is_valid_cpf("529.982.247-25")
    assert not is_valid_cpf("11.222.333/0001-81")
    assert is_valid_cnpj("11.222.333/0001-81")
    assert not is_valid_cnpj("529.982.247-25")


def test_clean_and_format():
    assert clean_document(" 529.982.247-25 ") == "52998224725"
    assert format_document("52998224725") == "529.982.247-25"
    assert format_document("11222333000181") == "11.222.333/0001-81"
    assert format_document("12-34") == "1234"
