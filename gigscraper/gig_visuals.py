"""Collects the images and videos shown in a gig's gallery."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

from .errors import MarkupInteractionError
from .selector import Selector
from .wrapped import WrappedTab

log = logging.getLogger(__name__)

_MAIN = "#main-wrapper > .main-content .gig-page > .main"
_MODAL_SLIDE = ".modal-package .slideshow-component .slideshow-slide"

CLOSE_BUTTON_SELECTOR = Selector(".modal-package .modal-close")
THUMBNAILS_SELECTOR = Selector(f"{_MAIN} .gallery-thumbnails a.thumbnail")
PREVIOUS_BUTTON_SELECTOR = Selector(f"{_MAIN} .gallery-thumbnails .nav-prev")
NEXT_BUTTON_SELECTOR = Selector(f"{_MAIN} .gallery-thumbnails .nav-next")
CURRENT_VISUAL_SELECTOR = Selector(f"{_MAIN} .gallery-slideshow .current .slide")
LOAD_VIDEO_BUTTON_SELECTOR = Selector(f"{_MAIN} .gallery-slideshow .current .slide button")
CURRENT_VIDEO_SELECTOR = Selector(f"{_MAIN} .gallery-slideshow .current .slide video")
CURRENT_FIGURE_SELECTOR = Selector(f"{_MAIN} .gallery-slideshow .current .slide figure")
MODAL_SLIDESHOW_SELECTOR = Selector(".modal-package .slideshow-component")
MODAL_SLIDES_SELECTOR = Selector(_MODAL_SLIDE)
MODAL_FIRST_SLIDE_SELECTOR = Selector(f"{_MODAL_SLIDE}:nth-child(1).current")
MODAL_PREVIOUS_BUTTON_SELECTOR = Selector(".modal-package .modal-nav-prev")
MODAL_NEXT_BUTTON_SELECTOR = Selector(".modal-package .modal-nav-next")

_NAVIGATION_PAUSE = 0.1


class VisualKind(Enum):
    """What a gallery entry shows."""

    VIDEO = "video"
    IMAGE = "image"


@dataclass(frozen=True)
class GalleryVisual:
    """A gallery entry and the address of its media."""

    kind: VisualKind
    src: str


def _active_thumbnail_selector(index: int) -> Selector:
    return Selector(
        f"{_MAIN} .gallery-thumbnails .thumbs-container a.thumbnail:nth-child({index}).active"
    )


def _modal_current_slide_selector(index: int) -> Selector:
    return Selector(f"{_MODAL_SLIDE}:nth-child({index}).current .slide")


def _click_while_present(tab: WrappedTab, selector: Selector) -> None:
    while True:
        try:
            button = tab.find_element(selector)
        except MarkupInteractionError:
            return
        button.click()
        time.sleep(_NAVIGATION_PAUSE)


def _activate_thumbnail(tab: WrappedTab, index: int, count: int) -> None:
    """Rewind the thumbnail strip and click thumbnail ``index`` until it is active."""
    _click_while_present(tab, PREVIOUS_BUTTON_SELECTOR)
    thumbnail_selector = THUMBNAILS_SELECTOR.nth_child(index)
    active_selector = _active_thumbnail_selector(index)
    for _ in range(count):
        tab.find_element(thumbnail_selector).click()
        try:
            tab.wait_for_element(active_selector)
        except MarkupInteractionError:
            log.debug(
                "Gallery thumbnail at index %s not visible. Clicking next button.", index
            )
            tab.find_element(NEXT_BUTTON_SELECTOR).click()
            time.sleep(_NAVIGATION_PAUSE)
        else:
            return


def _modal_visuals(tab: WrappedTab) -> list[GalleryVisual]:
    """Open the slideshow modal and read every slide in it."""
    try:
        tab.find_element(MODAL_SLIDESHOW_SELECTOR)
    except MarkupInteractionError:
        tab.find_element(CURRENT_FIGURE_SELECTOR).click()
        tab.wait_for_element(MODAL_SLIDESHOW_SELECTOR)

    slides_count = len(tab.find_elements(MODAL_SLIDES_SELECTOR))
    log.debug("Navigating to the first slide.")
    while True:
        try:
            tab.find_element(MODAL_FIRST_SLIDE_SELECTOR)
        except MarkupInteractionError:
            tab.find_element(MODAL_PREVIOUS_BUTTON_SELECTOR).click()
            time.sleep(_NAVIGATION_PAUSE)
        else:
            break

    visuals = []
    for slide_index in range(1, slides_count + 1):
        slide_selector = _modal_current_slide_selector(slide_index)
        slide = tab.find_element(slide_selector)
        if "slide-video" in slide.get_expected_attribute_value("class"):
            tab.find_element(slide_selector.append("button")).click()
            video = tab.wait_for_element(slide_selector.append("video"))
            visuals.append(GalleryVisual(VisualKind.VIDEO, video.get_expected_attribute_value("src")))
        else:
            image = tab.find_element(slide_selector.append("img"))
            visuals.append(GalleryVisual(VisualKind.IMAGE, image.get_expected_attribute_value("src")))
        log.debug("Navigating to the next slide.")
        tab.find_element(MODAL_NEXT_BUTTON_SELECTOR).click()
        time.sleep(_NAVIGATION_PAUSE)
    return visuals


def get_gig_visuals(tab: WrappedTab) -> list[GalleryVisual]:
    """Collect the gig gallery's videos and images in display order.

    Videos are read from the inline slideshow until the first image is met;
    from then on the slideshow modal lists the whole gallery, which is returned.
    """
    try:
        close_button = tab.find_element(CLOSE_BUTTON_SELECTOR)
    except MarkupInteractionError:
        pass
    else:
        close_button.click()

    thumbnails_count = len(tab.find_elements(THUMBNAILS_SELECTOR))
    visuals = []
    for index in range(1, thumbnails_count + 1):
        thumbnail = tab.find_element(THUMBNAILS_SELECTOR.nth_child(index))
        class_name = thumbnail.get_expected_attribute_value("class")
        log.debug("%s", class_name)
        if "active" not in class_name:
            _activate_thumbnail(tab, index, thumbnails_count)

        current = tab.find_element(CURRENT_VISUAL_SELECTOR)
        if "slide-video" not in current.get_expected_attribute_value("class"):
            return _modal_visuals(tab)
        tab.find_element(LOAD_VIDEO_BUTTON_SELECTOR).click()
        video = tab.wait_for_element(CURRENT_VIDEO_SELECTOR)
        visuals.append(GalleryVisual(VisualKind.VIDEO, video.get_expected_attribute_value("src")))
    return visuals