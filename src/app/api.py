from fastapi import APIRouter

from app.modules.attendance.router import router as attendance_router
from app.modules.auth import router as auth_router
from app.modules.classes.router import router as classes_router
from app.modules.dashboard.router import router as dashboard_router
from app.modules.documents.router import router as documents_router
from app.modules.messages.router import router as messages_router
from app.modules.notifications.router import router as notifications_router
from app.modules.parents.router import router as parents_router
from app.modules.registration_requests import router as registration_requests_router
from app.modules.students.router import router as students_router
from app.modules.teachers.router import router as teachers_router
from app.modules.updates.router import router as updates_router
from app.modules.users.router import router as users_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(registration_requests_router, tags=["Registration Requests"])

api_router.include_router(users_router, tags=["Users"])
api_router.include_router(parents_router, tags=["Parents"])
api_router.include_router(teachers_router, tags=["Teachers"])
api_router.include_router(students_router, tags=["Students"])
api_router.include_router(classes_router, tags=["Classes"])
api_router.include_router(attendance_router, tags=["Attendance"])
api_router.include_router(documents_router, tags=["Documents"])
api_router.include_router(messages_router, tags=["Messages"])
api_router.include_router(notifications_router, tags=["Notifications"])
api_router.include_router(updates_router, tags=["School Updates"])
api_router.include_router(dashboard_router, tags=["Dashboard"])
