"""认证服务：封装登录、登出以及会话 Cookie 的签发。"""

from typing import Optional, Tuple

from fastapi import Response

from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.core.constants import HTTP_STATUS_UNAUTHORIZED
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.logger import logger
from assetbook.packages.personnel.core.security import create_session_token, verify_password
from assetbook.packages.personnel.core.session import create_session, delete_session, session_ttl_seconds
from assetbook.packages.personnel.models.user import User
from assetbook.packages.personnel.storage import Storage


class AuthService:
    """负责处理登录与登出流程，并保持逻辑聚合。"""

    def login(self, storage: Storage, *, username: str, password: str) -> Tuple[User, str]:
        """校验用户凭证，创建服务端会话并返回用户与会话令牌。"""
        user = storage.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.warning("Login failed for username %s", username)
            raise AppException("Неверное имя пользователя или пароль", HTTP_STATUS_UNAUTHORIZED)

        token = self.issue_session(user)
        logger.info("User %s logged in", user.username)
        return user, token

    def issue_session(self, user: User) -> str:
        session_id = create_session(user.id, session_ttl_seconds())
        return create_session_token({"user_id": user.id, "sid": session_id})

    def logout(self, session_id: Optional[str]) -> None:
        if session_id:
            delete_session(session_id)

    @staticmethod
    def attach_session_cookie(response: Response, token: str) -> None:
        settings = get_settings()
        response.set_cookie(
            key=settings.session_cookie_name,
            value=token,
            max_age=session_ttl_seconds(),
            httponly=True,
            samesite="lax",
        )

    @staticmethod
    def clear_session_cookie(response: Response) -> None:
        response.delete_cookie(key=get_settings().session_cookie_name)


auth_service = AuthService()
