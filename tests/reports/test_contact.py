import pytest

from rollcall.core.exceptions import ValidationError
from rollcall.reports.contact import contact_links, sms_link, tel_link


def test_tel_link():
    assert tel_link(" +237670000001 ") == "tel:+237670000001"


def test_sms_link_encodes_message_like_uri_component():
    link = sms_link("+237670000001", "Amina Bello")

    assert link == (
        "sms:+237670000001?body=Hello%2C%20this%20is%20regarding%20Amina%20Bello's%20attendance."
        "%20Please%20contact%20the%20school%20for%20more%20information."
    )


def test_missing_phone_is_rejected():
    with pytest.raises(ValidationError):
        tel_link("")
    with pytest.raises(ValidationError):
        sms_link(None, "A")


def test_contact_links_none_without_phone():
    assert contact_links(None, "A") is None
    assert contact_links("0600", "A") == {"call": "tel:0600", "sms": sms_link("0600", "A")}
