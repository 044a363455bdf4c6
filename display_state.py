from enum import Enum


class DisplayState(Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


def display_state(loading: bool, item_count: int) -> DisplayState:
    if loading:
        return DisplayState.LOADING
    if item_count == 0:
        return DisplayState.EMPTY
    return DisplayState.POPULATED
