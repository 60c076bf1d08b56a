import pathlib

from streamlit.testing.v1 import AppTest

APP = str(pathlib.Path(__file__).resolve().parents[1] / "app.py")


def test_app_renders_random_fill_hall():
    at = AppTest.from_file(APP).run()
    assert not at.exception
    assert at.title[0].value == "Cinema Seating"
    assert at.session_state["engine"].profile == "random-fill"


def test_app_books_chosen_block_in_vip_rows():
    at = AppTest.from_file(APP).run()
    at.sidebar.selectbox[0].select("vip-rows").run()
    assert at.session_state["engine"].profile == "vip-rows"

    at.number_input(key="group_size").set_value(3).run()
    at.checkbox(key="book_vip").check().run()
    at.button(key="book_manual_button").click().run()

    assert not at.exception
    assert at.success[0].value == "Booked row 0, seats written: 0, 1, 2."
    assert at.session_state["engine"].vip_count() == 3


def test_app_reports_failed_booking():
    at = AppTest.from_file(APP).run()
    at.sidebar.selectbox[0].select("vip-rows").run()
    at.button(key="book_manual_button").click().run()
    at.button(key="book_manual_button").click().run()
    assert at.error[0].value == "Booking failed: seats unavailable."
