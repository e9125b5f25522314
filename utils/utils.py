import locale
import os


class Utils:
    @staticmethod
    def get_default_user_language():
        """Two-letter language code of the user's environment, "en" if unknown."""
        _locale = os.environ.get("LANG")
        if not _locale:
            try:
                _locale = locale.getlocale()[0]
            except ValueError:
                _locale = None
        if not _locale:
            return "en"
        for sep in ("_", ".", "-", "@"):
            if sep in _locale:
                _locale = _locale[:_locale.index(sep)]
        if _locale in ("C", "POSIX", ""):
            return "en"
        return _locale.lower()

    @staticmethod
    def is_path_component(name) -> bool:
        """Check that a name stays inside its parent directory when joined to it."""
        if not isinstance(name, str) or name in ("", ".", ".."):
            return False
        separators = {"/", os.sep}
        if os.altsep:
            separators.add(os.altsep)
        return not any(sep in name for sep in separators)

    @staticmethod
    def is_plain_name(name) -> bool:
        """Check that a name is fit for a new module or language.

        Stricter than is_path_component: blank names and backslashes are refused
        so the name is usable on every platform.
        """
        if not Utils.is_path_component(name) or name.strip() == "":
            return False
        return "\\" not in name
