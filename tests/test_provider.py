"""Tests for the TranslationProvider orchestrator."""

from __future__ import annotations

from transcheck.config import NO_TRANSLATION
from transcheck.core.documents import TextDocument
from transcheck.core.models import Position, Project
from transcheck.core.provider import TranslationProvider
from tests.helpers import (
    DE_FILE,
    FR_FILE,
    HOME_URI,
    RecordingPublisher,
    html_document,
    make_project,
    trans_unit,
    xliff_document,
)

HOME_TEXT = '<h1 i18n="@@greeting">Hello</h1>'


def load_fr_de(provider: TranslationProvider, de_units=()) -> None:
    provider.projects_updated([make_project("fr"), make_project("de")])
    provider.document_changed(xliff_document(FR_FILE, trans_unit("greeting", "Hello", "Bonjour")))
    provider.document_changed(xliff_document(DE_FILE, *de_units))
    provider.translations_loaded()


class TestClassification:

    def test_xlf_xml_is_a_translation_file(self, provider: TranslationProvider) -> None:
        assert provider.is_translation_file(xliff_document(FR_FILE))

    def test_xlf_with_other_language_is_not(self, provider: TranslationProvider) -> None:
        document = TextDocument(uri=FR_FILE, language_id="plaintext", text="")

        assert not provider.is_translation_file(document)

    def test_json_needs_a_claiming_project(self, provider: TranslationProvider) -> None:
        document = TextDocument(uri="file:///work/app/src/assets/i18n/fr.json", language_id="json", text="{}")

        assert not provider.is_translation_file(document)

        provider.projects_updated([Project(label="fr", root="/work/app/src", i18n_file="assets/i18n/fr.json")])

        assert provider.is_translation_file(document)

    def test_html_is_markup(self, provider: TranslationProvider) -> None:
        assert provider.is_markup_file(html_document(HOME_URI, ""))


class TestMarkupValidation:

    def test_markup_skipped_until_translations_exist(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        provider.projects_updated([make_project("fr")])

        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        assert publisher.calls == []
        assert provider.identifiers(HOME_URI) == []

    def test_missing_translation_reported_for_one_project(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        load_fr_de(provider)

        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        (diagnostic,) = publisher.latest(HOME_URI)
        assert diagnostic.message == "Missed translation in 'de' project(-s)"

    def test_markup_outside_every_project_gets_nothing(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        load_fr_de(provider)

        provider.document_changed(html_document("file:///tmp/scratch.html", HOME_TEXT))

        assert publisher.for_uri("file:///tmp/scratch.html") == []

    def test_other_documents_are_ignored(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        load_fr_de(provider)

        provider.document_changed(TextDocument(uri="file:///work/app/src/main.ts", language_id="typescript", text="i18n='@@x'"))

        assert publisher.calls == []


class TestRevalidation:

    def test_translation_change_revalidates_every_open_markup_document(self) -> None:
        publisher = RecordingPublisher()
        provider = TranslationProvider(publisher=publisher)
        shop = Project(label="fr", root="/shop/", i18n_file="messages.fr.xlf")
        blog = Project(label="de", root="/blog/", i18n_file="messages.de.xlf")
        fr_file = "file:///shop/locale/messages.fr.xlf"
        de_file = "file:///blog/locale/messages.de.xlf"
        shop_page = "file:///shop/app/home.html"
        blog_page = "file:///blog/app/post.html"

        provider.projects_updated([shop, blog])
        provider.document_changed(xliff_document(fr_file, trans_unit("greeting", "Hello", "Bonjour")))
        provider.document_changed(xliff_document(de_file))
        provider.document_changed(html_document(shop_page, HOME_TEXT))
        provider.document_changed(html_document(blog_page, HOME_TEXT))
        assert publisher.latest(blog_page) and "de" in publisher.latest(blog_page)[0].message

        # An fr change still re-runs validation of the de-only page
        blog_calls = len(publisher.for_uri(blog_page))
        provider.document_changed(xliff_document(fr_file, trans_unit("greeting", "Hello", "Salut"), version=2))
        assert len(publisher.for_uri(blog_page)) == blog_calls + 1

        # Adding the id to the de file clears the stale warning
        provider.document_changed(xliff_document(de_file, trans_unit("greeting", "Hello", "Hallo"), version=2))
        assert publisher.latest(blog_page) == []
        assert publisher.latest(shop_page) == []

    def test_zero_projects_clears_associations_and_diagnostics(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        load_fr_de(provider)
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))
        assert publisher.latest(HOME_URI)

        provider.projects_updated([])

        assert all(translation.project is None for translation in provider.translations)
        assert publisher.latest(HOME_URI) == []
        assert provider.identifiers(HOME_URI) == []

    def test_projects_updated_reassigns_known_translations(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        provider.document_changed(xliff_document(FR_FILE, trans_unit("greeting", "Hello", "Bonjour")))
        provider.document_changed(html_document(HOME_URI, '<p i18n="@@missing">x</p>'))
        assert provider.translations.get(FR_FILE).project is None

        provider.projects_updated([make_project("fr")])

        assert provider.translations.get(FR_FILE).project.label == "fr"
        (diagnostic,) = publisher.latest(HOME_URI)
        assert diagnostic.message == "Missed translation in 'fr' project(-s)"

    def test_translations_loaded_validates_open_markup(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        provider.projects_updated([make_project("fr")])
        provider.document_changed(html_document(HOME_URI, '<p i18n="@@missing">x</p>'))
        provider.document_changed(xliff_document(FR_FILE, trans_unit("greeting", "Hello", "Bonjour")))
        publisher.calls.clear()

        provider.translations_loaded()

        assert [uri for uri, _ in publisher.calls] == [HOME_URI]

    def test_document_closed_clears_diagnostics(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        load_fr_de(provider)
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        provider.document_closed(HOME_URI)

        assert publisher.latest(HOME_URI) == []
        assert HOME_URI not in provider.documents
        assert provider.hover(HOME_URI, Position(0, 12)) is None


class TestHover:

    def test_hover_inside_span_joins_targets(self, provider: TranslationProvider) -> None:
        load_fr_de(provider, de_units=[trans_unit("greeting", "Hello", "Hallo")])
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))
        start = HOME_TEXT.index("@@greeting")

        hover = provider.hover(HOME_URI, Position(0, start + 3))

        assert hover is not None
        assert hover.contents == "Bonjour,Hallo"
        assert hover.range.start == Position(0, start)
        assert hover.range.end == Position(0, start + len("@@greeting"))

    def test_hover_one_past_span_end_is_none(self, provider: TranslationProvider) -> None:
        load_fr_de(provider, de_units=[trans_unit("greeting", "Hello", "Hallo")])
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))
        end = HOME_TEXT.index("@@greeting") + len("@@greeting")

        assert provider.hover(HOME_URI, Position(0, end)) is not None
        assert provider.hover(HOME_URI, Position(0, end + 1)) is None

    def test_hover_marks_missing_targets(self, provider: TranslationProvider) -> None:
        load_fr_de(provider, de_units=[trans_unit("greeting", "Hello")])
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        hover = provider.hover(HOME_URI, Position(0, HOME_TEXT.index("@@greeting")))

        assert hover.contents == f"Bonjour,{NO_TRANSLATION}"

    def test_hover_on_unknown_document_is_none(self, provider: TranslationProvider) -> None:
        assert provider.hover("file:///nowhere.html", Position(0, 0)) is None

    def test_custom_separator(self, publisher: RecordingPublisher) -> None:
        from transcheck.config import Settings

        provider = TranslationProvider(publisher=publisher, settings=Settings(hover_separator=" | "))
        load_fr_de(provider, de_units=[trans_unit("greeting", "Hello", "Hallo")])
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        hover = provider.hover(HOME_URI, Position(0, HOME_TEXT.index("@@greeting")))

        assert hover.contents == "Bonjour | Hallo"


class TestLocations:

    def test_locations_point_at_targets(self, provider: TranslationProvider) -> None:
        load_fr_de(provider)
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        locations = provider.locations(HOME_URI, Position(0, HOME_TEXT.index("@@greeting") + 2))

        (location,) = locations
        fr_document = provider.documents.get(FR_FILE)
        target_offset = fr_document.get_text().index("Bonjour")
        assert location.uri == FR_FILE
        assert location.range.start == fr_document.position_at(target_offset)

    def test_locations_fall_back_to_id_range(self, provider: TranslationProvider) -> None:
        load_fr_de(provider, de_units=[trans_unit("greeting", "Hello")])
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        locations = provider.locations(HOME_URI, Position(0, HOME_TEXT.index("@@greeting")))

        de_location = [location for location in locations if location.uri == DE_FILE][0]
        de_document = provider.documents.get(DE_FILE)
        assert de_location.range.start == de_document.position_at(de_document.get_text().index("greeting"))

    def test_locations_miss_is_empty(self, provider: TranslationProvider) -> None:
        load_fr_de(provider)
        provider.document_changed(html_document(HOME_URI, HOME_TEXT))

        assert provider.locations(HOME_URI, Position(0, 0)) == []
        assert provider.locations("file:///nowhere.html", Position(0, 0)) == []


class TestJsonProjects:

    def test_json_translation_resource(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        project = Project(label="fr", root="/work/app/src", i18n_file="assets/i18n/fr.json")
        json_uri = "file:///work/app/src/assets/i18n/fr.json"
        provider.projects_updated([project])
        provider.document_changed(TextDocument(uri=json_uri, language_id="json", text='{"home": {"title": "Accueil"}}'))

        text = '<h1 i18n="@@home.title">Home</h1><p i18n="@@home.body">x</p>'
        provider.document_changed(html_document(HOME_URI, text))

        (diagnostic,) = publisher.latest(HOME_URI)
        assert diagnostic.range.start == Position(0, text.index("@@home.body"))
        assert provider.hover(HOME_URI, Position(0, text.index("@@home.title"))).contents == "Accueil"

    def test_json_delivered_before_projects_is_adopted(self, provider: TranslationProvider, publisher: RecordingPublisher) -> None:
        json_uri = "file:///work/app/src/assets/i18n/fr.json"
        provider.document_changed(TextDocument(uri=json_uri, language_id="json", text='{"home": {"title": "Accueil"}}'))
        assert len(provider.translations) == 0

        text = '<h1 i18n="@@home.title">Home</h1><p i18n="@@home.body">x</p>'
        provider.document_changed(html_document(HOME_URI, text))
        provider.projects_updated([Project(label="fr", root="/work/app/src", i18n_file="assets/i18n/fr.json")])
        provider.translations_loaded()

        assert len(provider.translations) == 1
        assert provider.translations.get(json_uri).label == "fr"
        (diagnostic,) = publisher.latest(HOME_URI)
        assert diagnostic.range.start == Position(0, text.index("@@home.body"))
