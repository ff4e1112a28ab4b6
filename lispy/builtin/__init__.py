from lispy.builtin.env_builtin import BUILTINS, register

__all__ = ["BUILTINS", "register"]
