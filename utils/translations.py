import gettext
import os

from utils.utils import Utils

_locale = Utils.get_default_user_language()


class I18N:
    localedir = os.path.join(os.path.dirname(os.path.abspath(os.path.dirname(__file__))), 'locale')
    locale = _locale
    translate = gettext.translation('base', localedir, languages=[_locale], fallback=True)

    @staticmethod
    def install_locale(locale):
        I18N.locale = locale
        I18N.translate = gettext.translation('base', I18N.localedir, languages=[locale], fallback=True)

    @staticmethod
    def _(s):
        return I18N.translate.gettext(s)
