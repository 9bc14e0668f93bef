"""Localized text for reasons, tags, period names and day tips.

English is the fallback for unknown locales and missing keys. Templates
use str.format placeholders.
"""

DEFAULT_LOCALE = "en"

MESSAGES = {
    "en": {
        # Reasons
        "reason.same_kind.in_person": "🚗 In-person day, good clustering",
        "reason.same_kind.remote": "💻 Online day, good clustering",
        "reason.nearby": "📍 Close to {name} ({distance:.1f} km)",
        "reason.online_dominant": "💡 Mostly online sessions, consider a separate in-person day",
        "reason.off_peak": "⏰ Quiet time",
        "reason.peak": "⚠️ Peak time",
        "reason.quiet_period": "⚖️ {period} is less busy, better balance",
        "reason.after_neighbor": "⏩ Right after {name}, tidy sequence",
        "reason.before_neighbor": "⏩ Right before {name}, tidy sequence",
        "reason.preferred_window": "🌟 Preferred teaching hours",
        "reason.busy_day": "💪 Many sessions today, take breaks between them",
        "reason.late_session": "🌙 Late session after a long day, mind your energy",
        # Tags
        "tag.same_type": "same type",
        "tag.nearby": "nearby",
        "tag.quiet": "quiet",
        "tag.balanced": "balanced",
        "tag.back_to_back": "back-to-back",
        # Periods
        "period.morning": "Morning",
        "period.afternoon": "Afternoon",
        "period.evening": "Evening",
        # Day tips
        "tip.empty_day": "This day is empty, an excellent choice",
        "tip.busy_day": "This day is busy ({count} sessions), consider another day",
        "tip.moderate_day": "{count} sessions today, there is still room",
        "tip.in_person_cluster": "In-person day, good for grouping in-person sessions",
        "tip.remote_heavy_for_in_person": "Mostly online sessions, consider another day for in-person",
        "tip.remote_cluster": "Online day, good for grouping sessions",
        "tip.in_person_heavy_for_remote": "Mostly in-person sessions, consider another day for online",
        "tip.location": "Location: {place}",
        "tip.location_unnamed": "set",
        "tip.long_day": "Long day, remember to take short breaks",
        "tip.consecutive_run": "{count} consecutive sessions, take a break afterwards",
        # Clock
        "clock.am": "AM",
        "clock.pm": "PM",
    },
    "ar": {
        "reason.same_kind.in_person": "🚗 يوم حضوري، تجميع مناسب",
        "reason.same_kind.remote": "💻 يوم أونلاين، تجميع مناسب",
        "reason.nearby": "📍 قريب من {name} ({distance:.1f} كم)",
        "reason.online_dominant": "💡 معظم الجلسات أونلاين، فكر في يوم حضوري منفصل",
        "reason.off_peak": "⏰ وقت غير مزدحم",
        "reason.peak": "⚠️ وقت ذروة",
        "reason.quiet_period": "⚖️ {period} أقل ازدحاماً، توازن أفضل",
        "reason.after_neighbor": "⏩ بعد {name} مباشرة، ترتيب جيد",
        "reason.before_neighbor": "⏩ قبل {name} مباشرة، ترتيب جيد",
        "reason.preferred_window": "🌟 الوقت المفضل للتدريس",
        "reason.busy_day": "💪 جلسات كثيرة اليوم، خذ استراحة بين الحصص",
        "reason.late_session": "🌙 جلسة متأخرة بعد يوم طويل، انتبه لطاقتك",
        "tag.same_type": "نفس النوع",
        "tag.nearby": "قريب",
        "tag.quiet": "هادئ",
        "tag.balanced": "متوازن",
        "tag.back_to_back": "متتالي",
        "period.morning": "الصباح",
        "period.afternoon": "الظهيرة",
        "period.evening": "المساء",
        "tip.empty_day": "هذا اليوم فارغ، خيار ممتاز",
        "tip.busy_day": "هذا اليوم مزدحم ({count} جلسات)، فكر في يوم آخر",
        "tip.moderate_day": "{count} جلسات اليوم، لا تزال هناك مساحة",
        "tip.in_person_cluster": "يوم حضوري، مناسب لتجميع الجلسات الحضورية",
        "tip.remote_heavy_for_in_person": "معظم الجلسات أونلاين، فكر في يوم آخر للحضوري",
        "tip.remote_cluster": "يوم أونلاين، مناسب لتجميع الجلسات",
        "tip.in_person_heavy_for_remote": "معظم الجلسات حضورية، فكر في يوم آخر للأونلاين",
        "tip.location": "الموقع: {place}",
        "tip.location_unnamed": "محدد",
        "tip.long_day": "يوم طويل، لا تنسَ أخذ استراحات قصيرة",
        "tip.consecutive_run": "{count} جلسات متتالية، خذ استراحة بعدها",
        "clock.am": "ص",
        "clock.pm": "م",
    },
}


def message(key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    """Render a localized message by key."""
    catalog = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    template = catalog.get(key)
    if template is None:
        template = MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**kwargs) if kwargs else template


def day_half_suffix(is_pm: bool, locale: str = DEFAULT_LOCALE) -> str:
    return message("clock.pm" if is_pm else "clock.am", locale)


def supported_locales() -> list[str]:
    return sorted(MESSAGES)
