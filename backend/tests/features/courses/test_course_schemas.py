"""
Tests for course document mapping.
"""

from outline_admin.features.courses import (
    AlleyLevel,
    Coordinate,
    Course,
    CourseLevel,
    HotSpot,
    PlaceRecord,
)


STORED_FIELDS = {
    "courseName": "Tiger",
    "courseLength": 5.2,
    "courseDuration": "40",
    "description": "A tiger around Gyeongbokgung",
    "regionDisplayName": "Seoul",
    "producer": "OUTLINE",
    "thumbnail": "https://cdn.example.com/thumbnails/tiger.png",
    "thumbnailNeon": "",
    "thumbnailLong": "",
    "coursePaths": [{"latitude": 37.5, "longitude": 127.1}],
    "locationInfo": {"name": "Seoul", "isoCountryCode": "KR"},
    "level": "hard",
    "alley": "few",
    "hotSpots": [
        {"title": "Gate", "spotDescription": "Main gate", "location": {"latitude": 37.5, "longitude": 127.1}},
        {"title": "", "spotDescription": "", "location": {"longitude": "", "latitude": ""}},
    ],
}


class TestCourseDocument:
    """Tests for Course.from_document / to_fields."""

    def test_from_document(self):
        course = Course.from_document("abc", STORED_FIELDS)

        assert course.id == "abc"
        assert course.course_name == "Tiger"
        assert course.course_length == "5.2"
        assert course.level == CourseLevel.HARD
        assert course.alley == AlleyLevel.FEW
        assert course.location_info.iso_country_code == "KR"
        assert course.location_info.locality == ""
        assert course.course_paths == [Coordinate(latitude=37.5, longitude=127.1)]

    def test_blank_hot_spot_location(self):
        course = Course.from_document("abc", STORED_FIELDS)
        assert course.hot_spots[0].location == Coordinate(latitude=37.5, longitude=127.1)
        assert course.hot_spots[1].location is None

    def test_to_fields_uses_stored_names(self):
        fields = Course(
            id="abc",
            course_name="Tiger",
            hot_spots=[HotSpot(title="Gate", spot_description="Main gate")],
            location_info=PlaceRecord(name="Seoul"),
        ).to_fields()

        assert "id" not in fields
        assert fields["courseName"] == "Tiger"
        assert fields["hotSpots"][0]["spotDescription"] == "Main gate"
        assert fields["locationInfo"]["subThroughfare"] == ""
        assert fields["level"] == "normal"
        assert fields["alley"] == "none"
        assert fields["coursePaths"] == []

    def test_missing_fields_default(self):
        course = Course.from_document("abc", {"courseName": "Bare"})
        assert course.thumbnail == ""
        assert course.hot_spots == []
        assert course.location_info is None

    def test_unknown_fields_ignored(self):
        course = Course.from_document("abc", {"courseName": "X", "legacyField": 1})
        assert "legacyField" not in course.to_fields()
