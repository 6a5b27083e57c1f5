"""Tests for batch label resolution."""

from d365_labels.config import LabelConfig
from d365_labels.label_cache import LabelFileCache
from d365_labels.resolution.label_resolver import LabelResolver


REFERENCES = [
    '@SYS:Company',
    '@SYS:CustAccount',
    '@SYS:Missing',
    '@AccountsReceivable:CustTable',
    '@AccountsReceivable:CustGroup',
    '@Contoso:Greeting',
    '@NOPE:Anything',
    'not-a-reference',
    '@SYS13342',
]


class TestResolveBatch:
    """Tests for grouped resolution."""

    def test_resolves_found_labels(self, resolver):
        result = resolver.resolve_batch(REFERENCES)
        assert result.found == {
            '@SYS:Company': 'Company',
            '@SYS:CustAccount': 'Customer account',
            '@AccountsReceivable:CustTable': 'Customers',
            '@AccountsReceivable:CustGroup': 'Customer group',
            '@Contoso:Greeting': 'Hello',
        }
        assert result.requested_count == len(REFERENCES)
        assert result.found_count == 5
        assert result.error is None

    def test_found_is_subset_of_valid_requests(self, resolver):
        result = resolver.resolve_batch(REFERENCES)
        assert set(result.found) <= set(REFERENCES) - set(result.invalid)

    def test_invalid_references_excluded_from_found_and_missing(self, resolver):
        result = resolver.resolve_batch(REFERENCES)
        assert result.invalid == ['not-a-reference', '@SYS13342']
        assert result.missing(REFERENCES) == ['@SYS:Missing', '@NOPE:Anything']

    def test_one_lookup_and_parse_per_file_id(self, instrumented_resolver, counting_locator, counting_loader):
        instrumented_resolver.resolve_batch(REFERENCES)
        file_ids = [file_id for file_id, _ in counting_locator.find_calls]
        assert sorted(file_ids) == ['AccountsReceivable', 'Contoso', 'NOPE', 'SYS']
        assert len(counting_loader.paths) == 3

    def test_fallback_applies_per_file(self, instrumented_resolver, counting_locator):
        result = instrumented_resolver.resolve_batch(['@SYS:Company', '@SYS:CustAccount', '@Contoso:Greeting'], 'de-DE')
        # SYS has a de-DE file (without CustAccount); Contoso falls back to en-US
        assert result.found == {'@SYS:Company': 'Unternehmen', '@Contoso:Greeting': 'Hello'}
        assert counting_locator.find_calls == [
            ('SYS', 'de-DE'),
            ('Contoso', 'de-DE'),
            ('Contoso', 'en-US'),
        ]

    def test_over_long_file_id_does_not_fail_batch(self, resolver):
        long_ref = '@' + 'A' * 300 + ':X'
        result = resolver.resolve_batch(['@SYS:Company', long_ref])
        assert result.found == {'@SYS:Company': 'Company'}
        assert result.missing(['@SYS:Company', long_ref]) == [long_ref]
        assert result.error is None

    def test_over_long_language_falls_back_in_batch(self, resolver):
        result = resolver.resolve_batch(['@SYS:Company', '@Contoso:Greeting'], 'x' * 300)
        assert result.found == {'@SYS:Company': 'Company', '@Contoso:Greeting': 'Hello'}

    def test_duplicate_references(self, instrumented_resolver, counting_loader):
        refs = ['@SYS:Company', '@SYS:Company']
        result = instrumented_resolver.resolve_batch(refs)
        assert result.found == {'@SYS:Company': 'Company'}
        assert result.requested_count == 2
        assert len(counting_loader.paths) == 1

    def test_uses_cache_across_requests(self, instrumented_resolver, counting_loader):
        instrumented_resolver.resolve_batch(['@SYS:Company'])
        instrumented_resolver.resolve_one('@SYS:CustAccount')
        instrumented_resolver.resolve_batch(['@SYS:Blank'])
        assert len(counting_loader.paths) == 1

    def test_empty_batch(self, resolver):
        result = resolver.resolve_batch([])
        assert result.found == {}
        assert result.requested_count == 0

    def test_not_configured(self, tmp_path):
        resolver = LabelResolver(LabelConfig(packages_dir=str(tmp_path / 'missing')))
        result = resolver.resolve_batch(['@SYS:Company'])
        assert result.found == {}
        assert result.error

    def test_parallel_workers_match_sequential(self, packages_dir, counting_loader):
        sequential = LabelResolver(LabelConfig(packages_dir=str(packages_dir)))
        parallel = LabelResolver(
            LabelConfig(packages_dir=str(packages_dir), batch_workers=4),
            cache=LabelFileCache(loader=counting_loader),
        )
        expected = sequential.resolve_batch(REFERENCES, 'fr-FR')
        actual = parallel.resolve_batch(REFERENCES, 'fr-FR')
        assert actual.found == expected.found
        assert actual.invalid == expected.invalid
        assert len(counting_loader.paths) == 3

    def test_to_dict(self, resolver):
        refs = ['@SYS:Company', '@SYS:Missing', 'bad']
        data = resolver.resolve_batch(refs).to_dict(refs)
        assert data == {
            'language': 'en-US',
            'totalRequested': 3,
            'totalFound': 1,
            'labels': {'@SYS:Company': 'Company'},
            'missingLabels': ['@SYS:Missing'],
            'invalidLabels': ['bad'],
        }
