from fastapi import APIRouter, Depends

from app.core.rate_limit import api_rate_limit
from app.modules.badges import router as badges_router
from app.modules.classes import router as classes_router
from app.modules.completions import router as completions_router
from app.modules.progress import router as progress_router
from app.modules.stats import router as stats_router
from app.modules.students import router as students_router
from app.modules.submissions import router as submissions_router
from app.modules.teachers import router as teachers_router
from app.modules.vark_modules import router as modules_router

api_router = APIRouter(dependencies=[Depends(api_rate_limit)])

api_router.include_router(students_router, prefix="/students", tags=["Students"])

api_router.include_router(modules_router, prefix="/modules", tags=["Modules"])

api_router.include_router(classes_router, prefix="/classes", tags=["Classes"])

api_router.include_router(progress_router, prefix="/progress", tags=["Progress"])

api_router.include_router(completions_router, prefix="/completions", tags=["Completions"])

api_router.include_router(submissions_router, prefix="/submissions", tags=["Submissions"])

api_router.include_router(badges_router, prefix="/badges", tags=["Badges"])

api_router.include_router(teachers_router, prefix="/teachers", tags=["Teachers"])

api_router.include_router(stats_router, prefix="/stats", tags=["Stats"])
