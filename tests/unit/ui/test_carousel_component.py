"""Tests for the carousel component."""

from unittest.mock import patch

from streamlit.testing.v1 import AppTest

from timeless.core.carousel import CarouselState
from timeless.ui.components.carousel import _on_swipe, get_carousel_state, render_carousel

IMAGES = ["https://a/1.jpg", "https://a/2.jpg", "https://a/3.jpg"]


class TestCarouselState:
    """Session-held carousel state."""

    def test_state_created_and_reused(self, session_state):
        state = get_carousel_state(session_state, "m1", IMAGES, "Trip")
        state.next()

        again = get_carousel_state(session_state, "m1", IMAGES, "Trip")

        assert again is state
        assert again.index == 1

    def test_switching_memory_drops_other_state(self, session_state):
        get_carousel_state(session_state, "m1", IMAGES, "Trip")

        get_carousel_state(session_state, "m2", IMAGES[:1], "Other")

        assert "carousel_state_m1" not in session_state
        assert isinstance(session_state["carousel_state_m2"], CarouselState)

    def test_widget_keys_survive_state_sweep(self, session_state):
        session_state["carousel_next_m1"] = True
        session_state["carousel_prev_m1"] = False

        get_carousel_state(session_state, "m1", IMAGES, "Trip")

        assert session_state["carousel_next_m1"] is True
        assert "carousel_prev_m1" in session_state

    def test_changed_images_reset_index(self, session_state):
        state = get_carousel_state(session_state, "m1", IMAGES, "Trip")
        state.index = 2

        get_carousel_state(session_state, "m1", IMAGES[:2], "Trip")

        assert state.index == 0


class TestSwipeCallback:
    """Slider drag treated as one swipe gesture."""

    def test_drag_left_past_threshold_advances(self, session_state):
        state = CarouselState(images=IMAGES)
        session_state["swipe_m1_0"] = -60

        with patch("timeless.ui.components.carousel.st") as mock_st:
            mock_st.session_state = session_state
            _on_swipe(state, "m1")

        assert state.index == 1
        assert session_state["swipe_nonce_m1"] == 1

    def test_short_drag_does_nothing(self, session_state):
        state = CarouselState(images=IMAGES, index=1)
        session_state["swipe_m1_0"] = 30

        with patch("timeless.ui.components.carousel.st") as mock_st:
            mock_st.session_state = session_state
            _on_swipe(state, "m1")

        assert state.index == 1

    def test_drag_right_goes_back(self, session_state):
        state = CarouselState(images=IMAGES)
        session_state["swipe_m1_0"] = 80

        with patch("timeless.ui.components.carousel.st") as mock_st:
            mock_st.session_state = session_state
            _on_swipe(state, "m1")

        assert state.index == 2


class TestRenderCarousel:
    """Rendering."""

    def test_no_images_renders_nothing(self, mock_st):
        with mock_st("timeless.ui.components.carousel") as patched_st:
            render_carousel("m1", [], "Empty")

        patched_st.image.assert_not_called()
        patched_st.container.assert_not_called()

    def test_single_image_has_no_controls(self, mock_st):
        with mock_st("timeless.ui.components.carousel") as patched_st:
            render_carousel("m1", IMAGES[:1], "Solo")

        patched_st.image.assert_called_once()
        patched_st.slider.assert_not_called()
        patched_st.caption.assert_called_once_with("1 / 1")

    def test_multiple_images_render_controls(self, mock_st):
        with mock_st("timeless.ui.components.carousel") as patched_st:
            render_carousel("m1", IMAGES, "Trip")

        args, kwargs = patched_st.image.call_args
        assert args[0] == IMAGES[0]
        assert kwargs["caption"] == "Trip image 1"
        patched_st.slider.assert_called_once()

    def test_next_button_advances_state(self, mock_st, session_state):
        with mock_st("timeless.ui.components.carousel") as patched_st:
            patched_st.button.side_effect = lambda label, key, **kwargs: key == "carousel_next_m1"
            render_carousel("m1", IMAGES, "Trip")

        assert session_state["carousel_state_m1"].index == 1
        patched_st.rerun.assert_called_once()


def _carousel_app():
    from timeless.ui.components.carousel import render_carousel

    render_carousel("m1", ["https://a/1.jpg", "https://a/2.jpg", "https://a/3.jpg"], "Trip")


class TestCarouselApp:
    """Button clicks driven through a real Streamlit script run."""

    def test_next_and_previous_buttons_wrap(self):
        at = AppTest.from_function(_carousel_app).run()
        assert at.session_state["carousel_state_m1"].index == 0

        at.button(key="carousel_next_m1").click().run()
        assert at.session_state["carousel_state_m1"].index == 1

        at.button(key="carousel_next_m1").click().run()
        at.button(key="carousel_next_m1").click().run()
        assert at.session_state["carousel_state_m1"].index == 0

        at.button(key="carousel_prev_m1").click().run()
        assert at.session_state["carousel_state_m1"].index == 2
        assert not at.exception
