#Fastapi
from fastapi import APIRouter, Path, Request, status
#Project files
import admin_api.application.dependencies as deps
import admin_api.presentation.schemas as schemas
#Typing
import typing as t
import logging


########################################
#                Setup                 #
########################################

router = APIRouter(
    prefix="/users",
    tags = ["users"],
    responses={
        401: {"description": "Bearer token is missing or invalid"},
        404: {"description": "Requested resource is not found"},
    }
    )

logger = logging.getLogger('admin_api')

UserId = t.Annotated[int, Path(description='Specifies the user')]


########################################
#             USER CRUD                #
########################################


@router.get('', description="Query parameters are filters (username, email, role, rolename, active, ...) plus orderby, sortOrder, limit and offset.")
async def get_users(
        request: Request,
        user_service: deps.UserServiceDependency,
        current_user: deps.CurrentUserDependency,
    ) -> schemas.UserListResponse:
    users = await user_service.list(current_user, dict(request.query_params))
    return schemas.UserListResponse(response=[user.to_wire() for user in users])


@router.get('/{user_id}')
async def get_user(
        user_service: deps.UserServiceDependency,
        current_user: deps.CurrentUserDependency,
        user_id: UserId,
    ) -> schemas.UserResponse:
    '''Returns a user specified by user_id'''
    user = await user_service.get(current_user, user_id)
    return schemas.UserResponse.of(user)


@router.post("", responses= {
        201: {"description":"Created successfully"},
        400: {"description":"Validation failed"},
        403: {"description":"User's tenant is outside of the acting user's tenant tree"},
        409: {"description":"User with this username or email already exists"},
    },status_code=status.HTTP_201_CREATED,
)
async def create_user(
        user_service: deps.UserServiceDependency,
        current_user: deps.CurrentUserDependency,
        new_user: schemas.UserPayload,
    ) -> schemas.UserResponse:
    user = await user_service.create(current_user, new_user.to_domain())
    return schemas.UserResponse.of(user, "user was created.")


@router.put("/{user_id}", description="Full replace: fields missing from the body are cleared.", responses= {
    400: {"description":"Validation failed"},
    403: {"description":"User's tenant is outside of the acting user's tenant tree"},
    409: {"description":"User with this username or email already exists"},
    })
async def update_user(
        user_service: deps.UserServiceDependency,
        current_user: deps.CurrentUserDependency,
        user_id: UserId,
        edited_user: schemas.UserPayload,
    ) -> schemas.UserResponse:
    user = edited_user.to_domain()
    user.id = user_id
    user = await user_service.update(current_user, user)
    return schemas.UserResponse.of(user, "user was updated.")


@router.delete("/{user_id}", description="Deactivates the user. Nothing is erased.")
async def delete_user(
        user_service: deps.UserServiceDependency,
        current_user: deps.CurrentUserDependency,
        user_id: UserId,
    ) -> schemas.AlertsResponse:
    await user_service.delete(current_user, user_id)
    return schemas.AlertsResponse.success("user was deleted.")
