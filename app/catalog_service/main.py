# catalog_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Catalog Service (dev mock)")

INSTRUCTOR = {"id": "6d1c3b0e-5a0f-4f7e-9a55-2f0e1f9c1a01", "name": "Jane Doe"}

COURSES = {
    "0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0001": {
        "id": "0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0001",
        "name": "Advanced Python",
        "slug": "advanced-python",
        "course_image": "https://cdn.example.com/courses/advanced-python.jpg",
        "created_by": INSTRUCTOR["id"],
        "is_free": False,
        "rating": 4.7,
        "instructor": INSTRUCTOR,
        "lessons_count": 42,
        "enrollments_count": 1280,
        "pricings": [
            {"currency_code": "USD", "regular_price": 59.99, "sale_price": 49.99, "is_active": True},
            {"currency_code": "EUR", "regular_price": 54.99, "sale_price": None, "is_active": True},
        ],
    },
    "0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0002": {
        "id": "0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0002",
        "name": "Intro to SQL",
        "slug": "intro-to-sql",
        "course_image": None,
        "created_by": INSTRUCTOR["id"],
        "is_free": True,
        "rating": 4.2,
        "instructor": INSTRUCTOR,
        "lessons_count": 12,
        "enrollments_count": 5400,
        "pricings": [],
    },
}

BUNDLES = {
    "7a9e2d4c-1b3f-4e5a-8c6d-9f0a1b2c0001": {
        "id": "7a9e2d4c-1b3f-4e5a-8c6d-9f0a1b2c0001",
        "title": "Backend Starter Pack",
        "thumbnail_url": "https://cdn.example.com/bundles/backend-starter.jpg",
        "created_by": INSTRUCTOR["id"],
        "is_free": False,
        "pricings": [
            {"currency_code": "EUR", "regular_price": 99.00, "sale_price": 79.00, "is_active": True},
        ],
    },
}


@app.get("/courses/{course_id}")
def get_course(course_id: str):
    course = COURSES.get(course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@app.get("/bundles/{bundle_id}")
def get_bundle(bundle_id: str):
    bundle = BUNDLES.get(bundle_id)
    if not bundle:
        raise HTTPException(status_code=404, detail="Bundle not found")
    return bundle
