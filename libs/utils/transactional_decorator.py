# libs/utils/transactional_decorator.py
import functools
import logging
from typing import Any, Callable, Coroutine, Optional, TypeVar, Concatenate, ParamSpec

from sqlalchemy.ext.asyncio import AsyncSession

P = ParamSpec("P")
R = TypeVar("R")
S = TypeVar("S")

logger = logging.getLogger(__name__)


def transactional(
    func: Callable[Concatenate[S, AsyncSession, P], Coroutine[Any, Any, R]],
) -> Callable[Concatenate[S, P], Coroutine[Any, Any, R]]:
    """
    Декоратор для асинхронных методов сервиса, который управляет транзакционной границей.

    Открывает сессию через ``self.session_factory``, передаёт её в метод
    первым аргументом после self, коммитит при успехе и откатывает при ошибке.
    Исключение пробрасывается вызывающему.
    """

    @functools.wraps(func)
    async def wrapper(self: S, *args: P.args, **kwargs: P.kwargs) -> R:
        session: Optional[AsyncSession] = None
        try:
            async with self.session_factory() as session:  # type: ignore[attr-defined]
                logger.debug(f"Транзакция открыта для метода {func.__name__}")
                result = await func(self, session, *args, **kwargs)
                await session.commit()
                logger.debug(f"Транзакция успешно закоммичена для метода {func.__name__}")
                return result
        except Exception as e:
            if session is not None and session.in_transaction():
                await session.rollback()
                logger.error(
                    f"Транзакция отменена (rollback) для метода {func.__name__} из-за ошибки: {e}",
                    exc_info=True,
                )
            else:
                logger.error(
                    f"Ошибка в методе {func.__name__}, но транзакция не была активна или уже закрыта: {e}",
                    exc_info=True,
                )
            raise

    return wrapper
