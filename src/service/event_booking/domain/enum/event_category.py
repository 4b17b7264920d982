from enum import StrEnum


class EventCategory(StrEnum):
    CONFERENCE = 'conference'
    WORKSHOP = 'workshop'
    SEMINAR = 'seminar'
    CONCERT = 'concert'
    SPORTS = 'sports'
    EXHIBITION = 'exhibition'
    NETWORKING = 'networking'
    OTHER = 'other'
