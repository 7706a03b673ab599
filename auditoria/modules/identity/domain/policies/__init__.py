from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy

__all__ = ["LoginPolicy"]
